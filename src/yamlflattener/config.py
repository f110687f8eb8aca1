"""Configuration model for the yamlflattener engine.

Provides ``FlattenerConfig`` with all tunable limits and sensible defaults.
Supports loading overrides from YAML or JSON files via the ``from_file()``
classmethod.  A config object is passed explicitly into every flatten call,
so concurrent callers with different limits never share state.
"""

from __future__ import annotations

import json
import pathlib

import yaml
from pydantic import BaseModel, Field

DEFAULT_MAX_INPUT_SIZE_BYTES = 10 * 1024 * 1024


class FlattenerConfig(BaseModel):
    """All tunable parameters with sensible defaults for YAML flattening."""

    # --- Traversal Limits ---
    max_nesting_depth: int = Field(
        default=100,
        gt=0,
        description="Deepest mapping/sequence nesting level accepted (root is 0).",
    )
    max_result_size: int = Field(
        default=100_000,
        gt=0,
        description="Maximum number of distinct flattened keys.",
    )
    max_key_length: int = Field(
        default=1000,
        gt=0,
        description="Sanitized mapping keys are truncated to this many characters.",
    )

    # --- Input Limits ---
    max_input_size_bytes: int = Field(
        default=DEFAULT_MAX_INPUT_SIZE_BYTES,
        gt=0,
        description="Maximum UTF-8 size of YAML text and of YAML files.",
    )
    parse_timeout_seconds: float = Field(default=5.0, gt=0)
    read_timeout_seconds: float = Field(default=5.0, gt=0)

    # --- Output ---
    escape_newlines: bool = False

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @classmethod
    def from_file(cls, path: str) -> FlattenerConfig:
        """Build a config from a ``.yaml``, ``.yml`` or ``.json`` override file.

        Keys missing from the file keep their defaults; an empty file yields
        the defaults.  Out-of-range limits raise a pydantic ``ValidationError``.
        """
        config_path = pathlib.Path(path)
        loader = _CONFIG_LOADERS.get(config_path.suffix.lower())
        if loader is None:
            raise ValueError(
                f"Unsupported config file extension '{config_path.suffix}' "
                f"for {path}; expected .yaml, .yml or .json"
            )
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

        overrides = loader(config_path.read_text(encoding="utf-8"))
        return cls(**(overrides or {}))


_CONFIG_LOADERS = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}
