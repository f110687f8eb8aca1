"""Flattened path construction.

Mapping members are joined with ``.``; sequence elements append ``[i]`` with
no separator, e.g. ``a.b[0].c``.  Keys are sanitized but never escaped, so a
key that literally contains ``.`` or ``[0]`` yields a path that cannot be
told apart from real nesting.
"""

from __future__ import annotations

import re

from yamlflattener.sanitizer import DEFAULT_MAX_KEY_LENGTH, sanitize_key

_SEGMENT_RE = re.compile(r"\[(\d+)\]|([^.\[]+)")


def child_path(
    parent: str,
    selector: str | int,
    max_key_length: int = DEFAULT_MAX_KEY_LENGTH,
) -> str:
    """Return the path of the child *selector* under *parent*.

    A ``str`` selector is a mapping key, an ``int`` selector a sequence index.
    """
    # bool is an int subclass but never a valid index
    if isinstance(selector, int) and not isinstance(selector, bool):
        return f"{parent}[{selector}]"
    return join_key(parent, sanitize_key(str(selector), max_key_length))


def join_key(parent: str, key: str) -> str:
    """Append an already sanitized mapping *key* to *parent*."""
    if not parent:
        return key
    return f"{parent}.{key}"


def split_path(path: str) -> list[str | int]:
    """Split a flattened path back into key and index segments.

    Only exact for paths whose keys contain no ``.``, ``[`` or ``]``.

    >>> split_path("items[0].name")
    ['items', 0, 'name']
    """
    segments: list[str | int] = []
    for match in _SEGMENT_RE.finditer(path):
        index, key = match.groups()
        segments.append(int(index) if index is not None else key)
    return segments
