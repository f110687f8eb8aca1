"""Core flattening logic.

Provides ``flatten_tree()`` to walk a composed YAML node graph and write
dot/bracket ``path -> value`` pairs into an :class:`OrderedResult` in
document order, and ``flatten_node()`` which returns just the pairs.

Mappings use dot notation, sequences use index notation (``[0]``), a root
sequence starts with ``[i]`` and a root scalar is written under the empty
path.  Empty mappings and sequences contribute nothing.
"""

from __future__ import annotations

from collections.abc import Set

from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from yamlflattener.config import FlattenerConfig
from yamlflattener.errors import DepthLimitError, ErrorCode, ParsingError, SizeLimitError
from yamlflattener.formatter import format_scalar
from yamlflattener.models import FlattenResult
from yamlflattener.ordered import OrderedResult
from yamlflattener.paths import child_path, join_key
from yamlflattener.sanitizer import sanitize_key
from yamlflattener.schema import MERGE_TAG

_NO_SKIP: frozenset[str] = frozenset()


def flatten_tree(root: Node, config: FlattenerConfig | None = None) -> FlattenResult:
    """Flatten the node graph rooted at *root*.

    Parameters
    ----------
    root:
        The root node of a composed YAML document.
    config:
        Limits and output options.  Uses defaults when *None*.

    Returns
    -------
    FlattenResult
        The frozen ordered pairs plus key count and deepest nesting level.

    Raises
    ------
    DepthLimitError
        A mapping or sequence sits deeper than ``max_nesting_depth``.
    SizeLimitError
        More than ``max_result_size`` distinct paths would be written.
    ParsingError
        A mapping key is not a scalar, or a merge key has an invalid value.
    """
    walker = _Walker(config or FlattenerConfig())
    try:
        walker.walk(root, "", 0)
    except RecursionError as exc:
        raise DepthLimitError(
            code=ErrorCode.E_DEPTH_LIMIT,
            message=(
                "maximum nesting depth of "
                f"{walker.config.max_nesting_depth} exceeded (interpreter recursion limit)"
            ),
            stage="flatten",
            limit=walker.config.max_nesting_depth,
        ) from exc

    walker.result.freeze()
    return FlattenResult(
        entries=walker.result,
        total_keys=len(walker.result),
        max_depth=walker.max_depth,
    )


def flatten_node(root: Node, config: FlattenerConfig | None = None) -> OrderedResult:
    """Flatten *root* and return only the ordered pairs."""
    return flatten_tree(root, config).entries


class _Walker:
    """Recursive traversal state for one flatten operation.

    Owns its result container and depth counter; nothing is shared between
    operations.
    """

    def __init__(self, config: FlattenerConfig) -> None:
        self.config = config
        self.result = OrderedResult()
        self.max_depth = 0

    def walk(self, node: Node, path: str, depth: int) -> None:
        if isinstance(node, ScalarNode):
            self._write(path, format_scalar(node, self.config.escape_newlines))
        elif isinstance(node, MappingNode):
            self._enter(path, depth)
            self._walk_mapping(node, path, depth, _NO_SKIP)
        elif isinstance(node, SequenceNode):
            self._enter(path, depth)
            for index, item in enumerate(node.value):
                self.walk(item, child_path(path, index), depth + 1)
        else:
            raise ParsingError(
                code=ErrorCode.E_PARSE_INVALID,
                message=f"unsupported YAML node type {type(node).__name__}",
                stage="flatten",
                path=path,
            )

    def _enter(self, path: str, depth: int) -> None:
        """Depth guard, checked before every mapping or sequence."""
        if depth > self.config.max_nesting_depth:
            raise DepthLimitError(
                code=ErrorCode.E_DEPTH_LIMIT,
                message=f"maximum nesting depth of {self.config.max_nesting_depth} exceeded",
                stage="flatten",
                limit=self.config.max_nesting_depth,
                actual=depth,
                path=path,
            )
        if depth > self.max_depth:
            self.max_depth = depth

    def _walk_mapping(
        self,
        node: MappingNode,
        path: str,
        depth: int,
        skip: Set[str],
    ) -> None:
        """Walk mapping members in order.

        Keys in *skip* are already defined by a mapping that merges this one
        and take precedence, so they are not written again.  Within a
        mapping, explicit keys beat merged ones and earlier merge sources
        beat later ones.
        """
        max_key_length = self.config.max_key_length
        members: list[tuple[str | None, Node]] = []
        for key_node, value_node in node.value:
            if not isinstance(key_node, ScalarNode):
                raise ParsingError(
                    code=ErrorCode.E_PARSE_NON_SCALAR_KEY,
                    message=f"non-scalar key in YAML mapping at '{path}'",
                    stage="flatten",
                    path=path,
                )
            if key_node.tag == MERGE_TAG:
                members.append((None, value_node))
            else:
                members.append((sanitize_key(key_node.value, max_key_length), value_node))

        taken = set(skip)
        taken.update(key for key, _ in members if key is not None)

        for key, value_node in members:
            if key is None:
                for source in self._merge_sources(value_node, path):
                    self._enter(path, depth + 1)
                    self._walk_mapping(source, path, depth + 1, frozenset(taken))
                    taken.update(
                        sanitize_key(k.value, max_key_length)
                        for k, _ in source.value
                        if isinstance(k, ScalarNode) and k.tag != MERGE_TAG
                    )
            elif key not in skip:
                self.walk(value_node, join_key(path, key), depth + 1)

    def _merge_sources(self, value_node: Node, path: str) -> list[MappingNode]:
        if isinstance(value_node, MappingNode):
            return [value_node]
        if isinstance(value_node, SequenceNode) and all(
            isinstance(item, MappingNode) for item in value_node.value
        ):
            return list(value_node.value)
        raise ParsingError(
            code=ErrorCode.E_PARSE_INVALID_MERGE,
            message=f"merge key at '{path}' must reference a mapping or a sequence of mappings",
            stage="flatten",
            path=path,
        )

    def _write(self, path: str, value: str) -> None:
        """Size guard, checked before every new key."""
        if path not in self.result and len(self.result) >= self.config.max_result_size:
            raise SizeLimitError(
                code=ErrorCode.E_SIZE_LIMIT_RESULT,
                message=(
                    "maximum result size of "
                    f"{self.config.max_result_size} key-value pairs exceeded"
                ),
                stage="flatten",
                limit=self.config.max_result_size,
                actual=len(self.result) + 1,
                path=path,
            )
        self.result.set(path, value)
