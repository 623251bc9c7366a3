"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from avl_display.config import (
    ConfigError,
    MenuConfig,
    RenderOptions,
    load_config,
)


def test_load_config_defaults() -> None:
    config = load_config(None)
    assert config == MenuConfig()
    assert config.render.min_cell_width == 3
    assert config.render.empty_text == "<empty tree>"


def test_load_config_from_json(tmp_path: Path) -> None:
    config_path = tmp_path / "menu.json"
    payload = {
        "initial_values": [30, 20, 10],
        "check_invariants": True,
        "render": {"min_cell_width": 5},
    }
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    config = load_config(config_path)

    assert config.initial_values == (30, 20, 10)
    assert config.check_invariants is True
    assert config.render == RenderOptions(min_cell_width=5)


def test_load_config_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "menu.yaml"
    config_path.write_text(
        """
initial_values:
  - 1
  - 2
render:
  empty_text: nothing here
""",
        encoding="utf-8",
    )

    config = load_config(str(config_path))

    assert config.initial_values == (1, 2)
    assert config.check_invariants is False
    assert config.render.empty_text == "nothing here"
    assert config.render.min_cell_width == 3


def test_load_config_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")
    assert load_config(config_path) == MenuConfig()


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.json")


def test_load_config_rejects_unknown_suffix(tmp_path: Path) -> None:
    config_path = tmp_path / "menu.toml"
    config_path.write_text("initial_values = []", encoding="utf-8")
    with pytest.raises(ConfigError, match="Unsupported config format"):
        load_config(config_path)


def test_load_config_wraps_parser_errors(tmp_path: Path) -> None:
    json_path = tmp_path / "broken.json"
    json_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON") as excinfo:
        load_config(json_path)
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)

    yaml_path = tmp_path / "broken.yaml"
    yaml_path.write_text("render: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(yaml_path)


@pytest.mark.parametrize(
    "payload",
    [
        [1, 2, 3],
        {"initial_values": "1,2"},
        {"initial_values": [1, "two"]},
        {"initial_values": [True]},
        {"check_invariants": "yes"},
        {"render": ["min_cell_width"]},
        {"render": {"min_cell_width": 0}},
        {"render": {"min_cell_width": 1}},
        {"render": {"min_cell_width": 2}},
        {"initial_values": 0},
        {"initial_values": ""},
        {"initial_values": False},
        {"render": 0},
        {"render": False},
        {"render": {"min_cell_width": "3"}},
        {"render": {"empty_text": 5}},
        {"render": {"colour": "red"}},
        {"verbose": True},
    ],
)
def test_load_config_rejects_invalid_payloads(tmp_path: Path, payload: object) -> None:
    config_path = tmp_path / "invalid.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(config_path)


def test_render_options_validate_directly() -> None:
    with pytest.raises(ConfigError):
        RenderOptions(min_cell_width=-1)
    assert isinstance(ConfigError("x"), ValueError)


def test_render_options_require_room_for_connectors() -> None:
    for width in (1, 2):
        with pytest.raises(ConfigError, match="at least 3"):
            RenderOptions(min_cell_width=width)
    assert RenderOptions(min_cell_width=3).min_cell_width == 3


def test_load_config_rejects_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "menu.json"
    config_path.mkdir()
    with pytest.raises(ConfigError, match="Unable to read config") as excinfo:
        load_config(config_path)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_load_config_rejects_undecodable_bytes(tmp_path: Path) -> None:
    config_path = tmp_path / "menu.json"
    config_path.write_bytes(b"\xff\xfe")
    with pytest.raises(ConfigError, match="Unable to read config") as excinfo:
        load_config(config_path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
