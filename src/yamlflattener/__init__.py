"""yamlflattener -- order-preserving YAML flattening with resource guards.

Public API re-exports for convenient access.
"""

from yamlflattener.config import FlattenerConfig
from yamlflattener.converter import flatten_node, flatten_tree
from yamlflattener.errors import (
    DepthLimitError,
    ErrorCode,
    ErrorKind,
    FileAccessError,
    FlattenError,
    FlattenErrorDetail,
    FlattenTimeoutError,
    InputValidationError,
    ParsingError,
    SecurityError,
    SizeLimitError,
)
from yamlflattener.formatter import format_scalar
from yamlflattener.models import FlattenResult
from yamlflattener.ordered import OrderedResult
from yamlflattener.parser import parse_guarded, validate_content
from yamlflattener.paths import child_path, join_key, split_path
from yamlflattener.reader import read_validated, validate_file_path
from yamlflattener.router import YAMLFlattener, flatten_file, flatten_string
from yamlflattener.sanitizer import sanitize_key, scrub_content

__all__ = [
    "YAMLFlattener",
    "FlattenerConfig",
    "FlattenResult",
    "OrderedResult",
    "flatten_string",
    "flatten_file",
    "flatten_tree",
    "flatten_node",
    "parse_guarded",
    "validate_content",
    "read_validated",
    "validate_file_path",
    "sanitize_key",
    "scrub_content",
    "child_path",
    "join_key",
    "split_path",
    "format_scalar",
    # Errors
    "ErrorCode",
    "ErrorKind",
    "FlattenErrorDetail",
    "FlattenError",
    "InputValidationError",
    "ParsingError",
    "DepthLimitError",
    "SizeLimitError",
    "FlattenTimeoutError",
    "FileAccessError",
    "SecurityError",
]
