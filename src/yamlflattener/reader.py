"""Path-validated, size-bounded, time-bounded reading of YAML files.

Checks run fail-fast in this order: empty path, directory traversal on the
cleaned path, absolute resolution, existence, file type, size.  No byte of
the file is read until every check has passed.
"""

from __future__ import annotations

import logging
import os
import stat

from yamlflattener._timeout import WorkerTimeout, run_with_timeout
from yamlflattener.config import FlattenerConfig
from yamlflattener.errors import (
    ErrorCode,
    FileAccessError,
    FlattenTimeoutError,
    InputValidationError,
    ParsingError,
    SecurityError,
    SizeLimitError,
)
from yamlflattener.sanitizer import scrub_content

logger = logging.getLogger("yamlflattener")


def validate_file_path(file_path: str) -> str:
    """Return the absolute form of *file_path* after traversal checks.

    The ``..`` check runs on the normalized path, so redundant separators
    or ``./`` segments cannot hide a traversal.
    """
    if not file_path:
        raise InputValidationError(
            code=ErrorCode.E_VALIDATION_EMPTY_PATH,
            message="file path cannot be empty",
            stage="read",
        )

    clean_path = os.path.normpath(file_path)
    segments = clean_path.replace(os.altsep or os.sep, os.sep).split(os.sep)
    if ".." in segments:
        logger.warning("yamlflattener | rejected traversal path=%r", file_path)
        raise SecurityError(
            code=ErrorCode.E_SECURITY_PATH_TRAVERSAL,
            message="file path contains invalid directory traversal patterns",
            stage="read",
            path=file_path,
        )

    try:
        return os.path.abspath(clean_path)
    except OSError as exc:
        raise InputValidationError(
            code=ErrorCode.E_VALIDATION_INVALID_PATH,
            message=f"invalid file path: {exc}",
            stage="read",
            path=file_path,
        ) from exc


def read_validated(file_path: str, config: FlattenerConfig | None = None) -> str:
    """Read a YAML file after path, type and size validation.

    Returns the decoded content with NUL bytes removed.
    """
    config = config or FlattenerConfig()
    abs_path = validate_file_path(file_path)

    try:
        st = os.stat(abs_path)
    except ValueError as exc:
        # e.g. an embedded NUL byte in the path
        raise InputValidationError(
            code=ErrorCode.E_VALIDATION_INVALID_PATH,
            message=f"invalid file path: {exc}",
            stage="read",
            path=file_path,
        ) from exc
    except FileNotFoundError as exc:
        raise FileAccessError(
            code=ErrorCode.E_FILE_NOT_FOUND,
            message=f"YAML file does not exist: {abs_path}",
            stage="read",
            path=abs_path,
        ) from exc
    except OSError as exc:
        raise FileAccessError(
            code=ErrorCode.E_FILE_UNREADABLE,
            message=f"error accessing YAML file: {exc}",
            stage="read",
            path=abs_path,
        ) from exc

    if stat.S_ISDIR(st.st_mode):
        raise FileAccessError(
            code=ErrorCode.E_FILE_IS_DIRECTORY,
            message=f"path is a directory, not a file: {abs_path}",
            stage="read",
            path=abs_path,
        )

    if st.st_size > config.max_input_size_bytes:
        raise SizeLimitError(
            code=ErrorCode.E_SIZE_LIMIT_FILE,
            message=(
                f"YAML file size {st.st_size} bytes exceeds maximum allowed "
                f"size of {config.max_input_size_bytes} bytes"
            ),
            stage="read",
            limit=config.max_input_size_bytes,
            actual=st.st_size,
            path=abs_path,
        )

    try:
        raw = run_with_timeout(
            lambda: _read_bytes(abs_path, config.max_input_size_bytes),
            config.read_timeout_seconds,
        )
    except WorkerTimeout as exc:
        logger.warning(
            "yamlflattener | read timed out after %.1fs | file=%s",
            config.read_timeout_seconds,
            abs_path,
        )
        raise FlattenTimeoutError(
            code=ErrorCode.E_TIMEOUT_READ,
            message="file reading timed out, file may be too large or system too busy",
            stage="read",
            limit=config.read_timeout_seconds,
            path=abs_path,
        ) from exc
    except OSError as exc:
        raise FileAccessError(
            code=ErrorCode.E_FILE_UNREADABLE,
            message=f"failed to read YAML file: {exc}",
            stage="read",
            path=abs_path,
        ) from exc

    # A special file can report st_size 0 and still produce more data.
    if len(raw) > config.max_input_size_bytes:
        raise SizeLimitError(
            code=ErrorCode.E_SIZE_LIMIT_FILE,
            message=(
                f"YAML file content exceeds maximum allowed size of "
                f"{config.max_input_size_bytes} bytes"
            ),
            stage="read",
            limit=config.max_input_size_bytes,
            actual=len(raw),
            path=abs_path,
        )

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParsingError(
            code=ErrorCode.E_PARSE_ENCODING,
            message=f"YAML file is not valid UTF-8: {exc}",
            stage="read",
            path=abs_path,
        ) from exc

    return scrub_content(content)


def _read_bytes(path: str, limit: int) -> bytes:
    # One byte past the limit is enough to detect an oversized stream.
    with open(path, "rb") as fh:
        return fh.read(limit + 1)
