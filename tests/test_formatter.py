"""Unit tests for yamlflattener.formatter and the YAML 1.2 core schema loader."""

from __future__ import annotations

import pytest
import yaml
from yaml.nodes import ScalarNode

from yamlflattener.formatter import escape_line_breaks, format_scalar
from yamlflattener.schema import (
    BOOL_TAG,
    FLOAT_TAG,
    INT_TAG,
    MERGE_TAG,
    NULL_TAG,
    STR_TAG,
    FlattenerLoader,
)


def _scalar(tag: str, value: str) -> ScalarNode:
    return ScalarNode(tag=tag, value=value)


def _resolved(text: str) -> ScalarNode:
    """Compose ``v: <text>`` and return the value node."""
    root = yaml.compose(f"v: {text}", Loader=FlattenerLoader)
    return root.value[0][1]


# ---------------------------------------------------------------------------
# Formatting by tag
# ---------------------------------------------------------------------------


class TestFormatFidelity:
    """Canonical renderings of each scalar type."""

    def test_null(self):
        assert format_scalar(_scalar(NULL_TAG, "null")) == ""
        assert format_scalar(_scalar(NULL_TAG, "~")) == ""

    def test_bool(self):
        assert format_scalar(_scalar(BOOL_TAG, "true")) == "true"
        assert format_scalar(_scalar(BOOL_TAG, "false")) == "false"
        assert format_scalar(_scalar(BOOL_TAG, "TRUE")) == "true"

    def test_int(self):
        assert format_scalar(_scalar(INT_TAG, "42")) == "42"

    def test_float(self):
        assert format_scalar(_scalar(FLOAT_TAG, "3.14")) == "3.14"

    def test_string_verbatim(self):
        assert format_scalar(_scalar(STR_TAG, "  keep  spaces ")) == "  keep  spaces "


class TestIntegers:
    """Integer canonicalisation."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("0", "0"),
            ("-17", "-17"),
            ("+12", "12"),
            ("007", "7"),
            ("0x1F", "31"),
            ("0o17", "15"),
            ("1_000", "1000"),
            ("123456789012345678901234567890", "123456789012345678901234567890"),
        ],
    )
    def test_canonical(self, raw, expected):
        assert format_scalar(_scalar(INT_TAG, raw)) == expected

    def test_unparseable_falls_back_to_text(self):
        assert format_scalar(_scalar(INT_TAG, "abc")) == "abc"


class TestFloats:
    """Shortest round-trip float rendering."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.0", "1"),
            ("2.50", "2.5"),
            ("-0.5", "-0.5"),
            ("1e3", "1000"),
            ("0.1", "0.1"),
            (".5", "0.5"),
            ("1e20", "100000000000000000000"),
            ("0.00001", "0.00001"),
            ("1.5e-7", "0.00000015"),
            ("-2.5E+3", "-2500"),
            (".inf", "+Inf"),
            ("-.inf", "-Inf"),
            ("+.INF", "+Inf"),
            (".nan", "NaN"),
            (".NaN", "NaN"),
        ],
    )
    def test_canonical(self, raw, expected):
        assert format_scalar(_scalar(FLOAT_TAG, raw)) == expected

    def test_unparseable_falls_back_to_text(self):
        assert format_scalar(_scalar(FLOAT_TAG, "one point five")) == "one point five"


class TestFallback:
    """Any other tag renders its raw text."""

    def test_custom_tag(self):
        assert format_scalar(_scalar("!custom", "thing")) == "thing"

    def test_timestamp_tag(self):
        node = _scalar("tag:yaml.org,2002:timestamp", "2024-01-01")
        assert format_scalar(node) == "2024-01-01"

    def test_bool_tag_with_yaml11_word(self):
        assert format_scalar(_scalar(BOOL_TAG, "yes")) == "yes"


class TestEscapeNewlines:
    """Single-line rendering of multi-line strings."""

    def test_disabled_by_default(self):
        assert format_scalar(_scalar(STR_TAG, "a\nb")) == "a\nb"

    def test_line_feed(self):
        assert format_scalar(_scalar(STR_TAG, "a\nb\n"), escape_newlines=True) == "a\\nb\\n"

    def test_crlf_becomes_single_escape(self):
        assert escape_line_breaks("a\r\nb") == "a\\nb"

    def test_lone_carriage_return(self):
        assert escape_line_breaks("a\rb") == "a\\rb"

    def test_non_string_unaffected(self):
        assert format_scalar(_scalar(INT_TAG, "5"), escape_newlines=True) == "5"


# ---------------------------------------------------------------------------
# YAML 1.2 core schema resolution
# ---------------------------------------------------------------------------


class TestCoreSchemaResolution:
    """Plain scalars resolve per YAML 1.2 core, not YAML 1.1."""

    @pytest.mark.parametrize(
        "text, tag",
        [
            ("~", NULL_TAG),
            ("null", NULL_TAG),
            ("NULL", NULL_TAG),
            ("true", BOOL_TAG),
            ("False", BOOL_TAG),
            ("42", INT_TAG),
            ("-3", INT_TAG),
            ("0x1F", INT_TAG),
            ("0o17", INT_TAG),
            ("3.14", FLOAT_TAG),
            ("1e3", FLOAT_TAG),
            (".inf", FLOAT_TAG),
            (".nan", FLOAT_TAG),
            ("hello", STR_TAG),
        ],
    )
    def test_implicit_tags(self, text, tag):
        assert _resolved(text).tag == tag

    @pytest.mark.parametrize("text", ["yes", "no", "on", "off", "y", "n", "1:30", "2024-01-01"])
    def test_yaml11_forms_stay_strings(self, text):
        node = _resolved(text)
        assert node.tag == STR_TAG
        assert format_scalar(node) == text

    def test_empty_value_is_null(self):
        root = yaml.compose("v:", Loader=FlattenerLoader)
        assert root.value[0][1].tag == NULL_TAG

    def test_quoted_scalar_is_string(self):
        assert _resolved('"42"').tag == STR_TAG
        assert _resolved('"null"').tag == STR_TAG

    def test_merge_key_recognised(self):
        root = yaml.compose("a: &a {x: 1}\nb:\n  <<: *a\n", Loader=FlattenerLoader)
        merge_key = root.value[1][1].value[0][0]
        assert merge_key.tag == MERGE_TAG

    def test_leading_zero_is_decimal(self):
        node = _resolved("0755")
        assert node.tag == INT_TAG
        assert format_scalar(node) == "755"
