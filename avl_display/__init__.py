"""AVL tree with deterministic ASCII rendering."""

from .balanced_tree import BalancedTree, Node, TreeInvariantError
from .config import ConfigError, MenuConfig, RenderOptions, load_config
from .renderer import (
    DisplayCell,
    DisplayGrid,
    TreeRenderer,
    build_display_grid,
    cell_width,
    format_grid,
    trim_rows_left,
)

__all__ = [
    "BalancedTree",
    "ConfigError",
    "DisplayCell",
    "DisplayGrid",
    "MenuConfig",
    "Node",
    "RenderOptions",
    "TreeInvariantError",
    "TreeRenderer",
    "build_display_grid",
    "cell_width",
    "format_grid",
    "load_config",
    "trim_rows_left",
]
