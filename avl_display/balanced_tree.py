"""Self-balancing AVL tree with deterministic text rendering.

The module exposes :class:`BalancedTree`, an ordered container of unique keys
that keeps the AVL height invariant after every insertion and removal.  The
structure mirrors the canonical recursive formulation:

* every node owns its two optional children exclusively, there are no parent
  links;
* recursive ``_insert``/``_remove`` helpers return the (possibly rotated) root
  of the subtree they were given and the caller stores it back into the slot it
  descended through;
* node heights are maintained incrementally and never recomputed by
  traversal.

Duplicate insertions and removal of absent keys are silent no-ops.  Rendering is
delegated to :mod:`avl_display.renderer`.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from .config import RenderOptions
from .renderer import TreeRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "BalancedTree",
    "Node",
    "TreeInvariantError",
]


class TreeInvariantError(RuntimeError):
    """Raised by :meth:`BalancedTree.validate` when the tree is corrupted."""


@dataclass(slots=True, eq=False)
class Node(Generic[T]):
    """Node representation used by :class:`BalancedTree`."""

    key: T
    height: int = 1
    left: Optional["Node[T]"] = None
    right: Optional["Node[T]"] = None


class BalancedTree(Generic[T]):
    """AVL tree supporting insertion, removal, lookup and rendering."""

    __slots__ = ("_root",)

    def __init__(self, *values: T) -> None:
        self._root: Optional[Node[T]] = None
        if values:
            self.insert(*values)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def insert(self, *values: T) -> None:
        """Insert each of *values* in order.

        Keys already present are ignored, the tree is left untouched for them.
        """

        for value in values:
            self._root = self._insert(self._root, value)

    def remove(self, value: T) -> None:
        """Remove *value* from the tree if it is present."""

        self._root = self._remove(self._root, value)

    def search(self, value: T) -> Optional[Node[T]]:
        """Return the node holding *value* or ``None`` when it is absent."""

        node = self._root
        while node is not None:
            if value < node.key:
                node = node.left
            elif node.key < value:
                node = node.right
            else:
                return node
        return None

    def contains(self, value: T) -> bool:
        return self.search(value) is not None

    @property
    def root(self) -> Optional[Node[T]]:
        """Root node of the tree, ``None`` when empty."""

        return self._root

    def height(self) -> int:
        """Return the height of the tree, ``0`` for an empty tree."""

        return self.node_height(self._root)

    def is_empty(self) -> bool:
        return self._root is None

    @staticmethod
    def node_height(node: Optional[Node[Any]]) -> int:
        return node.height if node is not None else 0

    def render(self, options: Optional[RenderOptions] = None) -> List[str]:
        """Render the tree into text lines, the root row first."""

        return TreeRenderer(options).render(self._root)

    def validate(self) -> None:
        """Check order, balance and stored heights of every node.

        Raises :class:`TreeInvariantError` describing the first violation.
        """

        self._check_subtree(self._root)

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return "\n".join(self.render())

    def __repr__(self) -> str:
        root_key = self._root.key if self._root is not None else None
        return f"BalancedTree(root={root_key!r}, height={self.height()})"

    # ------------------------------------------------------------------
    # Rotations
    # ------------------------------------------------------------------
    @classmethod
    def _update_height(cls, node: Node[T]) -> None:
        node.height = 1 + max(cls.node_height(node.left), cls.node_height(node.right))

    @classmethod
    def _balance(cls, node: Node[T]) -> int:
        return cls.node_height(node.left) - cls.node_height(node.right)

    @classmethod
    def _rotate_right(cls, node: Node[T]) -> Node[T]:
        new_root = node.left
        assert new_root is not None
        logger.debug("Right rotation at %r", node.key)
        node.left = new_root.right
        new_root.right = node
        cls._update_height(node)
        cls._update_height(new_root)
        return new_root

    @classmethod
    def _rotate_left(cls, node: Node[T]) -> Node[T]:
        new_root = node.right
        assert new_root is not None
        logger.debug("Left rotation at %r", node.key)
        node.right = new_root.left
        new_root.left = node
        cls._update_height(node)
        cls._update_height(new_root)
        return new_root

    # ------------------------------------------------------------------
    # Recursive helpers
    # ------------------------------------------------------------------
    @classmethod
    def _insert(cls, node: Optional[Node[T]], value: T) -> Node[T]:
        if node is None:
            return Node(value)

        if value < node.key:
            node.left = cls._insert(node.left, value)
        elif node.key < value:
            node.right = cls._insert(node.right, value)
        else:
            logger.debug("Ignoring duplicate key %r", value)
            return node

        cls._update_height(node)
        balance = cls._balance(node)

        # The side of the child the value went into selects single vs double.
        if balance > 1:
            assert node.left is not None
            if not value < node.left.key:
                node.left = cls._rotate_left(node.left)
            return cls._rotate_right(node)
        if balance < -1:
            assert node.right is not None
            if not node.right.key < value:
                node.right = cls._rotate_right(node.right)
            return cls._rotate_left(node)
        return node

    @classmethod
    def _remove(cls, node: Optional[Node[T]], value: T) -> Optional[Node[T]]:
        if node is None:
            logger.debug("Key %r not present, nothing to remove", value)
            return None

        if value < node.key:
            node.left = cls._remove(node.left, value)
        elif node.key < value:
            node.right = cls._remove(node.right, value)
        elif node.right is None:
            return node.left
        elif node.left is None:
            return node.right
        else:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key = successor.key
            node.right = cls._remove(node.right, successor.key)

        return cls._rebalance(node)

    @classmethod
    def _rebalance(cls, node: Node[T]) -> Node[T]:
        cls._update_height(node)
        balance = cls._balance(node)

        if balance > 1:
            assert node.left is not None
            if cls._balance(node.left) < 0:
                node.left = cls._rotate_left(node.left)
            return cls._rotate_right(node)
        if balance < -1:
            assert node.right is not None
            if cls._balance(node.right) > 0:
                node.right = cls._rotate_right(node.right)
            return cls._rotate_left(node)
        return node

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @classmethod
    def _check_subtree(
        cls, node: Optional[Node[T]]
    ) -> Tuple[int, Optional[T], Optional[T]]:
        """Return ``(height, min_key, max_key)`` of a verified subtree."""

        if node is None:
            return 0, None, None

        left_height, left_min, left_max = cls._check_subtree(node.left)
        right_height, right_min, right_max = cls._check_subtree(node.right)

        if left_max is not None and not left_max < node.key:
            raise TreeInvariantError(
                f"Order violated at {node.key!r}: left subtree holds {left_max!r}"
            )
        if right_min is not None and not node.key < right_min:
            raise TreeInvariantError(
                f"Order violated at {node.key!r}: right subtree holds {right_min!r}"
            )
        if abs(left_height - right_height) > 1:
            raise TreeInvariantError(
                f"Balance violated at {node.key!r}:"
                f" left height {left_height}, right height {right_height}"
            )
        expected = 1 + max(left_height, right_height)
        if node.height != expected:
            raise TreeInvariantError(
                f"Stored height {node.height} at {node.key!r} should be {expected}"
            )

        low = left_min if left_min is not None else node.key
        high = right_max if right_max is not None else node.key
        return expected, low, high
