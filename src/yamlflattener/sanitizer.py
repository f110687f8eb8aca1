"""Sanitization of mapping keys and raw YAML content."""

from __future__ import annotations

import re

DEFAULT_MAX_KEY_LENGTH = 1000

# C0 controls, DEL and C1 controls.
_CONTROL_CHARS_RE = re.compile("[\x00-\x1f\x7f-\x9f]")


def sanitize_key(key: str, max_length: int = DEFAULT_MAX_KEY_LENGTH) -> str:
    """Strip control characters from *key* and bound its length.

    Printable characters, including non-ASCII letters, punctuation and
    embedded spaces, pass through.  Surrounding whitespace is trimmed after
    truncation so the function is idempotent.
    """
    key = _CONTROL_CHARS_RE.sub("", key)
    return key[:max_length].strip()


def scrub_content(content: str) -> str:
    """Remove NUL bytes from raw YAML text before it reaches the parser."""
    return content.replace("\x00", "")
