"""Error codes and structured errors for the yamlflattener package.

``ErrorCode`` lists every failure the flattener can report.  ``ErrorKind``
groups the codes into the seven categories callers branch on.
``FlattenErrorDetail`` is the Pydantic data model; ``FlattenError`` and its
subclasses wrap it so errors can be raised and caught in control flow.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Category of a flattening failure."""

    VALIDATION = "validation"
    PARSING = "parsing"
    DEPTH_LIMIT = "depth_limit"
    SIZE_LIMIT = "size_limit"
    TIMEOUT = "timeout"
    FILE_ACCESS = "file_access"
    SECURITY = "security"


class ErrorCode(str, Enum):
    """Error codes for YAML flattening.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  All codes are fatal and carry the ``E_`` prefix.
    """

    # Validation
    E_VALIDATION_EMPTY_INPUT = "E_VALIDATION_EMPTY_INPUT"
    E_VALIDATION_EMPTY_DOCUMENT = "E_VALIDATION_EMPTY_DOCUMENT"
    E_VALIDATION_EMPTY_PATH = "E_VALIDATION_EMPTY_PATH"
    E_VALIDATION_INVALID_PATH = "E_VALIDATION_INVALID_PATH"
    E_VALIDATION_MISSING_INPUT = "E_VALIDATION_MISSING_INPUT"
    E_VALIDATION_CONFLICTING_INPUT = "E_VALIDATION_CONFLICTING_INPUT"

    # Parse
    E_PARSE_INVALID = "E_PARSE_INVALID"
    E_PARSE_NON_SCALAR_KEY = "E_PARSE_NON_SCALAR_KEY"
    E_PARSE_INVALID_MERGE = "E_PARSE_INVALID_MERGE"
    E_PARSE_ENCODING = "E_PARSE_ENCODING"

    # Limits
    E_DEPTH_LIMIT = "E_DEPTH_LIMIT"
    E_SIZE_LIMIT_INPUT = "E_SIZE_LIMIT_INPUT"
    E_SIZE_LIMIT_FILE = "E_SIZE_LIMIT_FILE"
    E_SIZE_LIMIT_RESULT = "E_SIZE_LIMIT_RESULT"

    # Timeouts
    E_TIMEOUT_PARSE = "E_TIMEOUT_PARSE"
    E_TIMEOUT_READ = "E_TIMEOUT_READ"

    # File access
    E_FILE_NOT_FOUND = "E_FILE_NOT_FOUND"
    E_FILE_IS_DIRECTORY = "E_FILE_IS_DIRECTORY"
    E_FILE_UNREADABLE = "E_FILE_UNREADABLE"

    # Security
    E_SECURITY_PATH_TRAVERSAL = "E_SECURITY_PATH_TRAVERSAL"


_KIND_BY_PREFIX: tuple[tuple[str, ErrorKind], ...] = (
    ("E_VALIDATION_", ErrorKind.VALIDATION),
    ("E_PARSE_", ErrorKind.PARSING),
    ("E_DEPTH_LIMIT", ErrorKind.DEPTH_LIMIT),
    ("E_SIZE_LIMIT_", ErrorKind.SIZE_LIMIT),
    ("E_TIMEOUT_", ErrorKind.TIMEOUT),
    ("E_FILE_", ErrorKind.FILE_ACCESS),
    ("E_SECURITY_", ErrorKind.SECURITY),
)


def kind_of(code: ErrorCode) -> ErrorKind:
    """Return the :class:`ErrorKind` an error code belongs to."""
    for prefix, kind in _KIND_BY_PREFIX:
        if code.value.startswith(prefix):
            return kind
    raise ValueError(f"Unclassified error code: {code!r}")


class FlattenErrorDetail(BaseModel):
    """Structured error with code, message, and location context.

    ``limit`` and ``actual`` carry the configured maximum and the observed
    value for limit failures; ``path`` is the flattened key path or the file
    path the failure relates to.  Together they let a caller decide on
    remediation (e.g. raising a limit) without re-parsing.
    """

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False
    limit: int | float | None = None
    actual: int | float | None = None
    path: str | None = None

    @property
    def kind(self) -> ErrorKind:
        return kind_of(self.code)


class FlattenError(Exception):
    """Raisable exception wrapping a :class:`FlattenErrorDetail`.

    Carries the structured model as ``.detail``.  Convenience properties
    delegate to it for the common fields.
    """

    def __init__(self, **kwargs: object) -> None:
        self.detail = FlattenErrorDetail(**kwargs)  # type: ignore[arg-type]
        super().__init__(f"{self.detail.kind.value} error: {self.detail.message}")

    @property
    def code(self) -> ErrorCode:
        return self.detail.code

    @property
    def kind(self) -> ErrorKind:
        return self.detail.kind

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def stage(self) -> str | None:
        return self.detail.stage

    @property
    def limit(self) -> int | float | None:
        return self.detail.limit

    @property
    def path(self) -> str | None:
        return self.detail.path


class InputValidationError(FlattenError):
    """Malformed or missing required input."""


class ParsingError(FlattenError):
    """The YAML grammar rejected the text, or the tree has a non-scalar key."""


class DepthLimitError(FlattenError):
    """Nesting exceeded ``max_nesting_depth``."""


class SizeLimitError(FlattenError):
    """Input text, input file, or result set exceeded its maximum."""


class FlattenTimeoutError(FlattenError):
    """Parsing or file reading did not finish within its time budget."""


class FileAccessError(FlattenError):
    """The target file is missing, is a directory, or cannot be read."""


class SecurityError(FlattenError):
    """The supplied path escapes the intended boundary."""
