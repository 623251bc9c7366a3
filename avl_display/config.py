"""Configuration for the tree renderer and the interactive menu.

Configuration files are plain JSON (``.json``) or YAML (``.yaml``/``.yml``)
documents such as::

    initial_values: [30, 20, 10, 25]
    check_invariants: true
    render:
      min_cell_width: 3
      empty_text: "<empty tree>"

Every key is optional.  Unknown keys are rejected so typos surface early
instead of being silently ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MIN_CELL_WIDTH = 3
DEFAULT_EMPTY_TEXT = "<empty tree>"

_RENDER_KEYS = frozenset({"min_cell_width", "empty_text"})
_MENU_KEYS = frozenset({"initial_values", "check_invariants", "render"})

__all__ = [
    "ConfigError",
    "DEFAULT_EMPTY_TEXT",
    "DEFAULT_MIN_CELL_WIDTH",
    "MenuConfig",
    "RenderOptions",
    "load_config",
]


class ConfigError(ValueError):
    """Raised when a configuration file cannot be loaded or is invalid."""


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Tuning knobs for :class:`avl_display.renderer.TreeRenderer`."""

    min_cell_width: int = DEFAULT_MIN_CELL_WIDTH
    empty_text: str = DEFAULT_EMPTY_TEXT

    def __post_init__(self) -> None:
        if not isinstance(self.min_cell_width, int) or isinstance(
            self.min_cell_width, bool
        ):
            raise ConfigError("min_cell_width must be an integer")
        if self.min_cell_width < DEFAULT_MIN_CELL_WIDTH:
            raise ConfigError(
                f"min_cell_width must be at least {DEFAULT_MIN_CELL_WIDTH}"
            )
        if not isinstance(self.empty_text, str):
            raise ConfigError("empty_text must be a string")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RenderOptions":
        _reject_unknown_keys(data, _RENDER_KEYS, "render")
        return cls(
            min_cell_width=data.get("min_cell_width", DEFAULT_MIN_CELL_WIDTH),
            empty_text=data.get("empty_text", DEFAULT_EMPTY_TEXT),
        )


@dataclass(frozen=True, slots=True)
class MenuConfig:
    """Settings consumed by the ``avl_menu`` command line front end."""

    initial_values: Tuple[int, ...] = ()
    check_invariants: bool = False
    render: RenderOptions = field(default_factory=RenderOptions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MenuConfig":
        _reject_unknown_keys(data, _MENU_KEYS, "top level")

        raw_values = data.get("initial_values")
        if raw_values is None:
            raw_values = []
        if not isinstance(raw_values, list):
            raise ConfigError("initial_values must be a list of integers")
        for item in raw_values:
            if not isinstance(item, int) or isinstance(item, bool):
                raise ConfigError("initial_values must be a list of integers")

        check_invariants = data.get("check_invariants", False)
        if not isinstance(check_invariants, bool):
            raise ConfigError("check_invariants must be a boolean")

        render_payload = data.get("render")
        if render_payload is None:
            render_payload = {}
        if not isinstance(render_payload, Mapping):
            raise ConfigError("render must be a mapping")

        return cls(
            initial_values=tuple(raw_values),
            check_invariants=check_invariants,
            render=RenderOptions.from_mapping(render_payload),
        )


def _reject_unknown_keys(
    data: Mapping[str, Any], allowed: frozenset[str], section: str
) -> None:
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise ConfigError(f"Unknown {section} config keys: {', '.join(unknown)}")


def _parse_document(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config {path}: {exc}") from exc
    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config {path}: {exc}") from exc
    raise ConfigError(
        f"Unsupported config format {suffix or '<none>'!r}; use .json, .yaml or .yml"
    )


def load_config(path: Optional[Path | str]) -> MenuConfig:
    """Load a :class:`MenuConfig` from *path*, defaults when *path* is ``None``."""

    if path is None:
        return MenuConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Unable to read config {config_path}: {exc}") from exc

    data = _parse_document(config_path, text)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError("Config document must be a mapping")

    config = MenuConfig.from_mapping(data)
    logger.debug("Loaded config from %s: %s", config_path, config)
    return config
