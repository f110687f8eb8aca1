"""YAMLFlattener -- orchestrator and public API for the flattening pipeline.

Routes YAML text or files through the pipeline:

1. Validate and read the file via :func:`read_validated` (file input only).
2. Parse via :func:`parse_guarded` (size check, NUL scrub, timeout).
3. Flatten via :func:`flatten_tree` (depth and result-size guards).
4. Assemble and return a :class:`FlattenResult`.

The router is **fail-closed**: every guard failure aborts the whole
operation and propagates as a :class:`FlattenError`; no partial result is
ever returned.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from yamlflattener.config import FlattenerConfig
from yamlflattener.converter import flatten_tree
from yamlflattener.errors import ErrorCode, FlattenError, InputValidationError
from yamlflattener.models import FlattenResult
from yamlflattener.ordered import OrderedResult
from yamlflattener.parser import parse_guarded, validate_content
from yamlflattener.reader import read_validated

logger = logging.getLogger("yamlflattener")

_YAML_EXTENSIONS = (".yaml", ".yml")


class YAMLFlattener:
    """Top-level entry point for flattening YAML documents.

    Parameters
    ----------
    config:
        Limits and output options.  Uses defaults when *None*.  Each
        instance keeps its own config, so flatteners with different limits
        can run concurrently.
    """

    def __init__(self, config: FlattenerConfig | None = None) -> None:
        self._config = config or FlattenerConfig()

    @classmethod
    def from_config_file(cls, config_path: str) -> YAMLFlattener:
        """Create a flattener whose limits are loaded from *config_path*.

        See :meth:`FlattenerConfig.from_file` for the accepted formats.
        """
        return cls(FlattenerConfig.from_file(config_path))

    @property
    def config(self) -> FlattenerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def can_handle(self, file_path: str) -> bool:
        """Return True if *file_path* ends with ``.yaml`` or ``.yml`` (case-insensitive)."""
        return file_path.lower().endswith(_YAML_EXTENSIONS)

    def flatten_string(self, content: str) -> FlattenResult:
        """Flatten YAML *content* into ordered ``path -> value`` pairs."""
        return self._run(source="<string>", load=lambda: content)

    def flatten_file(self, file_path: str) -> FlattenResult:
        """Flatten the YAML file at *file_path*.

        The path is validated (no directory traversal, regular file, size
        limit) before any content is read.
        """
        return self._run(
            source=file_path,
            load=lambda: read_validated(file_path, self._config),
        )

    def flatten(
        self,
        content: str | None = None,
        file_path: str | None = None,
    ) -> FlattenResult:
        """Flatten either *content* or *file_path*; exactly one must be given."""
        if content is None and file_path is None:
            raise InputValidationError(
                code=ErrorCode.E_VALIDATION_MISSING_INPUT,
                message="either content or file_path must be provided",
                stage="input",
            )
        if content is not None and file_path is not None:
            raise InputValidationError(
                code=ErrorCode.E_VALIDATION_CONFLICTING_INPUT,
                message="only one of content or file_path should be provided, not both",
                stage="input",
            )
        if content is not None:
            return self.flatten_string(content)
        return self.flatten_file(file_path)  # type: ignore[arg-type]

    def validate(self, content: str) -> None:
        """Raise a :class:`FlattenError` unless *content* parses within limits."""
        validate_content(content, self._config)

    async def aflatten_string(self, content: str) -> FlattenResult:
        """Async wrapper around :meth:`flatten_string`.

        Offloads the synchronous call to a thread via ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(self.flatten_string, content)

    async def aflatten_file(self, file_path: str) -> FlattenResult:
        """Async wrapper around :meth:`flatten_file`."""
        return await asyncio.to_thread(self.flatten_file, file_path)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, source: str, load: Callable[[], str]) -> FlattenResult:
        overall_start = time.monotonic()
        try:
            content = load()
            root = parse_guarded(content, self._config)
            result = flatten_tree(root, self._config)
        except FlattenError as exc:
            logger.error(
                "yamlflattener | source=%s | code=%s | detail=%s",
                source,
                exc.code.value,
                exc.message,
            )
            raise

        elapsed = time.monotonic() - overall_start

        logger.info(
            "yamlflattener | source=%s | keys=%d | depth=%d | time=%.3fs",
            source,
            result.total_keys,
            result.max_depth,
            elapsed,
        )
        if self._config.log_sample_data and result.total_keys:
            first_key = result.entries.keys()[0]
            logger.debug(
                "yamlflattener | source=%s | sample %s=%r",
                source,
                first_key,
                result.entries[first_key],
            )

        return result.model_copy(
            update={"source": source, "processing_time_seconds": elapsed}
        )


def flatten_string(content: str, config: FlattenerConfig | None = None) -> OrderedResult:
    """Flatten YAML *content* and return the ordered pairs."""
    return YAMLFlattener(config).flatten_string(content).entries


def flatten_file(file_path: str, config: FlattenerConfig | None = None) -> OrderedResult:
    """Flatten the YAML file at *file_path* and return the ordered pairs."""
    return YAMLFlattener(config).flatten_file(file_path).entries
