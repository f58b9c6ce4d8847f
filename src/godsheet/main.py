"""Command-line entry point for godsheet."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from godsheet.character import Character, load_sheet
from godsheet.character.models import DerivedState
from godsheet.errors import GodsheetError
from godsheet.i18n import load_default_strings
from godsheet.logging_config import configure_logging
from godsheet.rolls import RollBuilder

logger = structlog.get_logger(__name__)

ROLL_KINDS = ("attribute", "save", "attack", "fray")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="godsheet", description="Derive character sheets and build roll requests"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    derive = subparsers.add_parser("derive", help="Run a derivation pass and print the result")
    derive.add_argument("sheet", type=Path, help="Character sheet YAML file")
    derive.add_argument(
        "--format", "-f", choices=("text", "json"), default="text", help="Output format"
    )

    roll = subparsers.add_parser("roll", help="Build a fast-path roll request")
    roll.add_argument("sheet", type=Path, help="Character sheet YAML file")
    roll.add_argument("kind", choices=ROLL_KINDS, help="Roll to build")
    roll.add_argument(
        "target", nargs="?", default=None, help="Attribute, save or item id (not for fray)"
    )

    wear = subparsers.add_parser("wear", help="Wear an armour item and show the result")
    wear.add_argument("sheet", type=Path, help="Character sheet YAML file")
    wear.add_argument("item_id", help="Armour item id")
    wear.add_argument(
        "--format", "-f", choices=("text", "json"), default="text", help="Output format"
    )

    shield = subparsers.add_parser("shield", help="Toggle the shield and show the result")
    shield.add_argument("sheet", type=Path, help="Character sheet YAML file")
    shield.add_argument(
        "--format", "-f", choices=("text", "json"), default="text", help="Output format"
    )

    return parser


def format_derived(name: str, derived: DerivedState) -> str:
    """Format derived state for terminal display."""
    lines = [
        f"{name or 'Unnamed'} - Level {derived.level}",
        "",
        "Attributes:",
    ]
    for state in derived.attributes.values():
        lines.append(
            f"  {state.abbr:<4} {state.value:>2}  mod {state.mod:+d}  check {state.check}"
        )

    lines.append("")
    lines.append("Saves:")
    for save in derived.saves.values():
        lines.append(f"  {save.label:<10} {save.value}+")

    lines.append("")
    lines.append(f"Health:    {derived.health.value}/{derived.health.max}")
    lines.append(f"AC:        {derived.ac}")
    lines.append(f"Effort:    {derived.effort.value}/{derived.effort.max}")
    lines.append(f"Influence: {derived.influence.value}/{derived.influence.max}")
    lines.append(f"Dominion:  {derived.dominion.spent} spent")

    if derived.advancement is None:
        lines.append("Advancement: maximum level reached")
    else:
        lines.append(
            f"Next level: {derived.advancement.xp} XP, "
            f"{derived.advancement.dominion_spent} dominion spent"
        )

    return "\n".join(lines)


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _show(character: Character, output_format: str) -> None:
    derived = character.prepare_derived_data()
    if output_format == "json":
        _emit(derived.model_dump(mode="json"))
    else:
        print(format_derived(character.name, derived))


def _build_roll(character: Character, kind: str, target: str | None) -> dict[str, Any]:
    builder = RollBuilder(character)
    if kind == "fray":
        return builder.build_fray().model_dump(mode="json")
    if target is None:
        raise GodsheetError(f"A target is required for {kind} rolls")
    if kind == "attribute":
        return builder.build_attribute_check(target).model_dump(mode="json")
    if kind == "save":
        return builder.build_save_check(target).model_dump(mode="json")
    return builder.build_attack(target).model_dump(mode="json")


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments (defaults to sys.argv)

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        character = Character(load_sheet(args.sheet), localizer=load_default_strings())

        if args.command == "derive":
            _show(character, args.format)
        elif args.command == "roll":
            _emit(_build_roll(character, args.kind, args.target))
        elif args.command == "wear":
            character.wear_armour(args.item_id)
            _show(character, args.format)
        elif args.command == "shield":
            character.toggle_shield()
            _show(character, args.format)
    except GodsheetError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
