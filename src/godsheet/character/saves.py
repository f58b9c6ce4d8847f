"""Saving throw targets for godsheet."""

from godsheet.character.models import AttributeState, CharacterSheet, SaveState
from godsheet.i18n import Localizer, localize
from godsheet.rules.tables import SAVE_KEYS, AttributeKey, RulesTable, SaveKey


def get_save_mod(
    rules: RulesTable, save: SaveKey, attributes: dict[AttributeKey, AttributeState]
) -> int:
    """The better modifier of the save's two attributes."""
    first, second = rules.save_attributes[save]
    return max(attributes[first].mod, attributes[second].mod)


def resolve_saves(
    rules: RulesTable,
    sheet: CharacterSheet,
    attributes: dict[AttributeKey, AttributeState],
    level: int,
    localizer: Localizer | None = None,
) -> dict[SaveKey, SaveState]:
    """
    Compute every save target.

    A save succeeds when the roll meets or beats
    ``save_base - (save modifier + level)``.

    Args:
        rules: Rules table with the save base and attribute pairs
        sheet: Sheet holding stored save penalties
        attributes: Already resolved attributes
        level: Resolved level
        localizer: Label lookup

    Returns:
        Mapping of save key to SaveState
    """
    saves: dict[SaveKey, SaveState] = {}
    for key in SAVE_KEYS:
        saves[key] = SaveState(
            value=rules.save_base - (get_save_mod(rules, key, attributes) + level),
            label=localize(localizer, f"saves.{key.value}.label", key.value),
            penalty=sheet.saves[key].penalty,
        )
    return saves
