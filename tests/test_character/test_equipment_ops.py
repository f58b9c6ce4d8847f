"""Tests for wearing armour and toggling the shield."""

import pytest

from godsheet.character import toggle_shield, wear_armour
from godsheet.character.models import ItemKind
from godsheet.errors import ItemNotFound


@pytest.fixture
def armoury(make_sheet, longsword):
    """A sheet owning two armour items, one worn, and a weapon."""
    return make_sheet(
        items=[
            {"id": "leather", "name": "Leather", "type": "armour", "baseArmour": 7, "worn": True},
            {"id": "plate", "name": "Plate", "type": "armour", "baseArmour": 3},
            longsword,
        ]
    )


def _worn_ids(sheet) -> list[str]:
    return [item.id for item in sheet.items_of_kind(ItemKind.ARMOUR) if item.worn]


class TestWearArmour:
    """Tests for wear_armour."""

    def test_wearing_takes_off_others(self, armoury):
        """Exactly the chosen armour is worn afterwards."""
        wear_armour(armoury, "plate")
        assert _worn_ids(armoury) == ["plate"]

    def test_wearing_twice_keeps_it_on(self, armoury):
        """Wearing the already-worn armour leaves it worn."""
        wear_armour(armoury, "leather")
        wear_armour(armoury, "leather")
        assert _worn_ids(armoury) == ["leather"]

    def test_several_worn_before(self, make_sheet):
        """Exactly one armour is worn afterwards however many were worn before."""
        sheet = make_sheet(
            items=[
                {"id": "leather", "type": "armour", "baseArmour": 7, "worn": True},
                {"id": "mail", "type": "armour", "baseArmour": 5, "worn": True},
                {"id": "plate", "type": "armour", "baseArmour": 3, "worn": True},
            ]
        )
        wear_armour(sheet, "mail")
        assert _worn_ids(sheet) == ["mail"]

    def test_unknown_item(self, armoury):
        """An id the character does not own raises ItemNotFound."""
        with pytest.raises(ItemNotFound) as exc_info:
            wear_armour(armoury, "mithril")
        assert exc_info.value.item_id == "mithril"
        assert _worn_ids(armoury) == ["leather"]

    def test_non_armour_item(self, armoury):
        """A weapon id is not wearable armour."""
        with pytest.raises(ItemNotFound):
            wear_armour(armoury, "sword1")

    def test_character_ac_after_pass(self, make_character, longsword):
        """Armour class follows the newly worn armour on the next pass."""
        character = make_character(
            attributes={"dex": 14},
            items=[
                {"id": "leather", "type": "armour", "baseArmour": 7, "worn": True},
                {"id": "plate", "type": "armour", "baseArmour": 3},
            ],
        )
        assert character.derived.ac == 5

        character.wear_armour("plate")
        character.prepare_derived_data()
        assert character.derived.ac == 1


class TestToggleShield:
    """Tests for toggle_shield."""

    def test_toggle_flips(self, make_sheet):
        """Each toggle flips the flag and returns the new value."""
        sheet = make_sheet()
        assert toggle_shield(sheet) is True
        assert sheet.use_shield is True
        assert toggle_shield(sheet) is False
        assert sheet.use_shield is False
