"""Interactive console menu around :class:`avl_display.BalancedTree`.

The menu reads integers from standard input and lets the user insert values,
delete values and print the current tree.  All tree logic lives in
``avl_display``; this script only wires console input to
``insert``/``remove``/``render`` and configures logging.
"""

from __future__ import annotations

import argparse
from enum import IntEnum
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from avl_display import (
    BalancedTree,
    ConfigError,
    RenderOptions,
    TreeInvariantError,
    load_config,
)

logger = logging.getLogger(__name__)

MENU_OPTIONS = (
    "Insert a number into the AVL tree",
    "Delete a number from the AVL tree",
    "Print the AVL tree",
    "Exit",
)
MENU_RULE = "-" * 40
INVALID_CHOICE_MESSAGE = "Invalid choice, try again!"
INVALID_NUMBER_MESSAGE = "Invalid integer, try again!"


class MenuChoice(IntEnum):
    """Selections offered by the menu."""

    INVALID = 0
    INSERT = 1
    DELETE = 2
    PRINT = 3
    EXIT = 4


def _read_choice(
    input_fn: Callable[[str], str], output: Callable[[str], None]
) -> MenuChoice:
    """Print the menu and return the user's selection."""

    output(MENU_RULE)
    for index, label in enumerate(MENU_OPTIONS, start=1):
        output(f"{index}. {label}")

    response = input_fn("Choose an option: ").strip()
    try:
        selection = int(response)
    except ValueError:
        return MenuChoice.INVALID
    if not 1 <= selection <= len(MENU_OPTIONS):
        return MenuChoice.INVALID
    return MenuChoice(selection)


def _read_value(
    prompt: str, input_fn: Callable[[str], str], output: Callable[[str], None]
) -> Optional[int]:
    response = input_fn(prompt).strip()
    try:
        return int(response)
    except ValueError:
        output(INVALID_NUMBER_MESSAGE)
        return None


def print_tree(
    tree: BalancedTree[int],
    output: Callable[[str], None] = print,
    options: Optional[RenderOptions] = None,
) -> None:
    """Write the rendered *tree* framed by blank lines."""

    output("")
    for row in tree.render(options):
        output(" " + row)
    output("")


def run_menu(
    tree: BalancedTree[int],
    *,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
    options: Optional[RenderOptions] = None,
    check_invariants: bool = False,
) -> int:
    """Drive the menu until the user exits or input is exhausted.

    Returns the process exit code.
    """

    while True:
        try:
            choice = _read_choice(input_fn, output)
            if choice is MenuChoice.INVALID:
                output(INVALID_CHOICE_MESSAGE)
                continue
            if choice is MenuChoice.EXIT:
                return 0
            if choice is MenuChoice.PRINT:
                print_tree(tree, output, options)
                continue

            if choice is MenuChoice.INSERT:
                value = _read_value("Enter an integer to insert: ", input_fn, output)
                if value is None:
                    continue
                tree.insert(value)
                logger.info("Inserted %d, height is now %d", value, tree.height())
            else:
                value = _read_value("Enter an integer to delete: ", input_fn, output)
                if value is None:
                    continue
                tree.remove(value)
                logger.info("Removed %d, height is now %d", value, tree.height())
        except EOFError:
            logger.debug("Input exhausted, leaving menu")
            return 0

        if check_invariants:
            try:
                tree.validate()
            except TreeInvariantError as exc:
                logger.error("Tree invariant check failed: %s", exc)
                return 1


def _parse_values(raw: str) -> List[int]:
    return [int(item) for item in raw.split(",") if item.strip()]


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for the interactive AVL tree menu."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML file with initial values and render options.",
    )
    parser.add_argument(
        "--values",
        type=str,
        default=None,
        help="Comma separated integers inserted before the menu starts.",
    )
    parser.add_argument(
        "--check-invariants",
        action="store_true",
        help="Validate the AVL invariants after every insert or delete.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    values = list(config.initial_values)
    if args.values is not None:
        try:
            values.extend(_parse_values(args.values))
        except ValueError as exc:
            parser.error(f"Failed to parse integer payloads: {exc}")

    tree: BalancedTree[int] = BalancedTree(*values)
    logger.info("Starting menu with %d preloaded values", len(values))
    return run_menu(
        tree,
        options=config.render,
        check_invariants=args.check_invariants or config.check_invariants,
    )


__all__ = [
    "MENU_OPTIONS",
    "MenuChoice",
    "main",
    "print_tree",
    "run_menu",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
