"""Guarded YAML parsing.

Wraps :func:`yaml.compose` with an input size check, NUL byte scrubbing and
a wall-clock timeout so oversized or pathological input fails fast instead
of exhausting memory or blocking the caller.
"""

from __future__ import annotations

import logging

import yaml
from yaml.nodes import Node

from yamlflattener._timeout import WorkerTimeout, run_with_timeout
from yamlflattener.config import FlattenerConfig
from yamlflattener.errors import (
    ErrorCode,
    FlattenTimeoutError,
    InputValidationError,
    ParsingError,
    SizeLimitError,
)
from yamlflattener.sanitizer import scrub_content
from yamlflattener.schema import FlattenerLoader

logger = logging.getLogger("yamlflattener")


def parse_guarded(text: str, config: FlattenerConfig | None = None) -> Node:
    """Parse YAML *text* into the root node of its single document.

    Raises:
        InputValidationError: *text* is empty or holds no document.
        SizeLimitError: *text* is larger than ``max_input_size_bytes``.
        FlattenTimeoutError: parsing exceeded ``parse_timeout_seconds``.
        ParsingError: the YAML is malformed or holds several documents.
    """
    config = config or FlattenerConfig()

    if not text:
        raise InputValidationError(
            code=ErrorCode.E_VALIDATION_EMPTY_INPUT,
            message="YAML content cannot be empty",
            stage="parse",
        )

    size = len(text.encode("utf-8", errors="surrogatepass"))
    if size > config.max_input_size_bytes:
        raise SizeLimitError(
            code=ErrorCode.E_SIZE_LIMIT_INPUT,
            message=(
                f"YAML content size {size} bytes exceeds maximum allowed "
                f"size of {config.max_input_size_bytes} bytes"
            ),
            stage="parse",
            limit=config.max_input_size_bytes,
            actual=size,
        )

    content = scrub_content(text)

    try:
        root = run_with_timeout(
            lambda: yaml.compose(content, Loader=FlattenerLoader),
            config.parse_timeout_seconds,
        )
    except WorkerTimeout as exc:
        logger.warning(
            "yamlflattener | parse timed out after %.1fs | size=%d",
            config.parse_timeout_seconds,
            size,
        )
        raise FlattenTimeoutError(
            code=ErrorCode.E_TIMEOUT_PARSE,
            message="YAML parsing timed out, content may be too complex",
            stage="parse",
            limit=config.parse_timeout_seconds,
        ) from exc
    except (yaml.YAMLError, RecursionError) as exc:
        raise ParsingError(
            code=ErrorCode.E_PARSE_INVALID,
            message=f"failed to parse YAML content: {exc}",
            stage="parse",
        ) from exc

    if root is None:
        raise InputValidationError(
            code=ErrorCode.E_VALIDATION_EMPTY_DOCUMENT,
            message="YAML content contains no document",
            stage="parse",
        )

    return root


def validate_content(text: str, config: FlattenerConfig | None = None) -> None:
    """Check that *text* is valid, non-empty YAML within the configured limits.

    Returns ``None`` on success and raises the same errors as
    :func:`parse_guarded` otherwise.
    """
    parse_guarded(text, config)
