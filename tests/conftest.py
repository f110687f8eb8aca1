"""Shared test fixtures for yamlflattener tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from yamlflattener.config import FlattenerConfig
from yamlflattener.router import YAMLFlattener


@pytest.fixture
def default_config() -> FlattenerConfig:
    """Return a default FlattenerConfig."""
    return FlattenerConfig()


@pytest.fixture
def flattener(default_config) -> YAMLFlattener:
    return YAMLFlattener(default_config)


@pytest.fixture
def alertmanager_yaml() -> str:
    """Return a nested config with a literal block scalar."""
    return (
        "alertmanager:\n"
        "  config:\n"
        "    receivers:\n"
        '      - name: "null"\n'
        "      - name: discord_prometheus\n"
        "        webhook_configs:\n"
        "          - url: https://example.com/webhook/prometheus\n"
        "            send_resolved: true\n"
        "            http_config:\n"
        "              headers:\n"
        "                Content-Type: application/json\n"
        "            body: |-\n"
        "              {\n"
        '                "content": "{{ .Status }}"\n'
        "              }\n"
    )


@pytest.fixture
def tmp_yaml_file(tmp_path: Path):
    """Factory fixture to write YAML text to a temp file and return the path."""

    def _write(content: str, filename: str = "test.yaml") -> str:
        file_path = tmp_path / filename
        file_path.write_text(content, encoding="utf-8")
        return str(file_path)

    return _write


@pytest.fixture
def nested_yaml():
    """Factory fixture for flow-style YAML with *levels* nested mappings.

    The innermost mapping sits at depth ``levels - 1`` (the root is depth 0).
    """

    def _build(levels: int, leaf: str = "v") -> str:
        return "{k: " * levels + leaf + "}" * levels

    return _build
