"""Canonical string rendering of YAML scalar nodes.

``format_scalar`` is total: every tag the parser can produce maps to a
string, and a tagged value that cannot be converted (``!!int abc``) falls
back to its raw text instead of failing.
"""

from __future__ import annotations

import math
from decimal import Decimal

from yaml.nodes import ScalarNode

from yamlflattener.schema import BOOL_TAG, FLOAT_TAG, INT_TAG, NULL_TAG

_INT_BASES = {"0o": 8, "0x": 16, "0b": 2}


def format_scalar(node: ScalarNode, escape_newlines: bool = False) -> str:
    """Render a scalar node as its canonical string value.

    - null -> ``""``
    - bool -> ``"true"`` / ``"false"``
    - int -> base-10 digits (hex and octal forms are converted)
    - float -> shortest round-trip digits in positional notation with no
      forced ``.0``;
      infinities and NaN -> ``"+Inf"``, ``"-Inf"``, ``"NaN"``
    - str and any other tag -> raw text, with line breaks escaped as
      ``\\n`` / ``\\r`` when *escape_newlines* is set
    """
    tag = node.tag
    text = node.value

    if tag == NULL_TAG:
        return ""
    if tag == BOOL_TAG:
        lowered = text.lower()
        if lowered in ("true", "false"):
            return lowered
    elif tag == INT_TAG:
        try:
            return str(_parse_int(text))
        except ValueError:
            pass
    elif tag == FLOAT_TAG:
        try:
            return _format_float(text)
        except ValueError:
            pass

    # str, custom tags, !!binary, !!timestamp and unconvertible values
    if escape_newlines:
        return escape_line_breaks(text)
    return text


def escape_line_breaks(text: str) -> str:
    """Replace line breaks with their two-character escape sequences."""
    return text.replace("\r\n", "\\n").replace("\n", "\\n").replace("\r", "\\r")


def _parse_int(text: str) -> int:
    body = text.replace("_", "")
    sign = ""
    if body and body[0] in "+-":
        sign, body = body[0], body[1:]
    base = _INT_BASES.get(body[:2].lower(), 10)
    if base != 10:
        body = body[2:]
    return int(sign + body, base)


def _format_float(text: str) -> str:
    body = text.replace("_", "").lower()
    unsigned = body.lstrip("+-")
    if unsigned in (".inf", "inf"):
        value = -math.inf if body.startswith("-") else math.inf
    elif unsigned in (".nan", "nan"):
        value = math.nan
    else:
        value = float(body)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    # Shortest round-trip digits, always positional.
    rendered = format(Decimal(repr(value)), "f")
    if rendered.endswith(".0"):
        rendered = rendered[:-2]
    return rendered
