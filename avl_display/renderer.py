"""Grid based text rendering of binary trees.

Rendering happens in three passes:

1. :func:`build_display_grid` walks the tree level by level and emits, for
   each depth ``d``, exactly ``2**d`` :class:`DisplayCell` slots.  Missing
   children still produce placeholder cells (and placeholder children of their
   own) so that every parent sits above the two columns of its children.
2. :func:`format_grid` lays the grid out bottom-up.  Values are centred in
   cells of a fixed odd width and rows of ``/`` and ``\\`` connectors taper
   from each parent towards its children.
3. :func:`trim_rows_left` removes the indentation common to every row.

An empty tree renders as a single sentinel line.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, Deque, Iterable, List, Optional

from .config import RenderOptions

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .balanced_tree import Node

logger = logging.getLogger(__name__)

__all__ = [
    "DisplayCell",
    "DisplayGrid",
    "TreeRenderer",
    "build_display_grid",
    "cell_width",
    "format_grid",
    "trim_rows_left",
]


@dataclass(frozen=True, slots=True)
class DisplayCell:
    """A single slot of the render grid."""

    value: str = ""
    present: bool = False


DisplayGrid = List[List[DisplayCell]]

_ABSENT = DisplayCell()


def build_display_grid(root: Optional["Node[Any]"], depth: int) -> DisplayGrid:
    """Return ``depth`` rows of cells describing the complete shape of *root*."""

    grid: DisplayGrid = []
    if root is None or depth <= 0:
        return grid

    queue: Deque[Optional["Node[Any]"]] = deque([root])
    for _ in range(depth):
        row: List[DisplayCell] = []
        for _ in range(len(queue)):
            node = queue.popleft()
            if node is None:
                row.append(_ABSENT)
                queue.extend((None, None))
                continue
            row.append(DisplayCell(str(node.key), True))
            queue.append(node.left)
            queue.append(node.right)
        grid.append(row)
    return grid


def cell_width(values: Iterable[str], minimum: int = 3) -> int:
    """Return the widest of *values*, at least *minimum*, rounded up to odd."""

    width = max((len(value) for value in values), default=0)
    width = max(width, minimum)
    if width % 2 == 0:
        width += 1
    return width


def _centre(value: str, width: int, column: int) -> str:
    # Odd padding leans outwards: left children get it on the left.
    long_padding = width - len(value)
    short_padding = long_padding // 2
    long_padding -= short_padding
    if column % 2:
        return " " * short_padding + value + " " * long_padding
    return " " * long_padding + value + " " * short_padding


def format_grid(grid: DisplayGrid, width: int) -> List[str]:
    """Lay out *grid* into text rows, the root row first."""

    if not grid:
        return []

    rows: List[str] = []
    row_count = len(grid)
    elements = 1 << (row_count - 1)
    left_pad = 0

    for level in range(row_count):
        cells = grid[row_count - level - 1]
        # Number of connector rows to the parent level, also the offset unit.
        space = (1 << level) * (width + 1) // 2 - 1

        parts: List[str] = []
        for column in range(elements):
            parts.append(" " * (2 * left_pad + 1 if column else left_pad))
            cell = cells[column]
            if cell.present:
                parts.append(_centre(cell.value, width, column))
            else:
                parts.append(" " * width)
        rows.append("".join(parts))

        if elements == 1:
            break

        left_space = space + 1
        right_space = space - 1
        for _ in range(space):
            parts = []
            for column in range(elements):
                present = cells[column].present
                if column % 2 == 0:
                    parts.append(" " * (2 * left_space + 1 if column else left_space))
                    parts.append("/" if present else " ")
                    parts.append(" " * (right_space + 1))
                else:
                    parts.append(" " * right_space)
                    parts.append("\\" if present else " ")
            rows.append("".join(parts))
            left_space += 1
            right_space -= 1

        left_pad += space + 1
        elements //= 2

    rows.reverse()
    return rows


def trim_rows_left(rows: List[str]) -> List[str]:
    """Strip the leading spaces shared by every row in *rows*."""

    if not rows:
        return []
    margin = min(len(row) - len(row.lstrip(" ")) for row in rows)
    return [row[margin:] for row in rows]


class TreeRenderer:
    """Render tree shapes into lists of text lines."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options if options is not None else RenderOptions()

    def render(self, root: Optional["Node[Any]"]) -> List[str]:
        if root is None:
            return [self.options.empty_text]

        grid = build_display_grid(root, root.height)
        width = cell_width(
            (cell.value for row in grid for cell in row if cell.present),
            self.options.min_cell_width,
        )
        logger.debug("Rendering %d levels with cell width %d", len(grid), width)
        return trim_rows_left(format_grid(grid, width))
