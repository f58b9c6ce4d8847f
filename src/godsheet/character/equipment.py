"""Equip and toggle operations for godsheet characters."""

import structlog

from godsheet.character.models import CharacterSheet, ItemKind
from godsheet.errors import ItemNotFound

logger = structlog.get_logger(__name__)


def wear_armour(sheet: CharacterSheet, item_id: str) -> None:
    """
    Wear one armour item and take off every other.

    Only one armour item is worn at a time; the sheet's storage does not
    enforce that, so this operation does.

    Args:
        sheet: Sheet whose items are updated in place
        item_id: Id of the armour item to wear

    Raises:
        ItemNotFound: If the character owns no armour item with that id
    """
    armour = sheet.items_of_kind(ItemKind.ARMOUR)
    if not any(item.id == item_id for item in armour):
        raise ItemNotFound(item_id)

    for item in armour:
        item.worn = item.id == item_id

    logger.info(
        "armour_worn",
        character=sheet.name,
        item_id=item_id,
        armour_owned=len(armour),
    )


def toggle_shield(sheet: CharacterSheet) -> bool:
    """
    Flip whether the character carries a shield.

    Armour class is not recomputed until the next derivation pass.

    Returns:
        The new shield state
    """
    sheet.use_shield = not sheet.use_shield
    logger.info("shield_toggled", character=sheet.name, use_shield=sheet.use_shield)
    return sheet.use_shield
