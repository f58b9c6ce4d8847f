"""Tests for save targets."""

from godsheet.character import AttributeResolver
from godsheet.character.saves import get_save_mod, resolve_saves
from godsheet.rules import SaveKey


class TestSaveModifier:
    """Tests for picking the better of two attribute modifiers."""

    def test_best_of_pair(self, rules, make_sheet):
        """Hardiness takes the better of CON and STR."""
        sheet = make_sheet(attributes={"str": 12, "con": 16})
        attributes = AttributeResolver(rules).resolve_all(sheet)
        assert get_save_mod(rules, SaveKey.HARDINESS, attributes) == 3

    def test_negative_pair(self, rules, make_sheet):
        """Two penalties give the lesser penalty."""
        sheet = make_sheet(attributes={"wis": 4, "cha": 8})
        attributes = AttributeResolver(rules).resolve_all(sheet)
        assert get_save_mod(rules, SaveKey.SPIRIT, attributes) == -1


class TestResolveSaves:
    """Tests for the save target formula."""

    def test_hardiness(self, rules, make_sheet):
        """STR +1, CON +3 at level 2: 16 - (3 + 2) = 11."""
        sheet = make_sheet(attributes={"str": 12, "con": 16})
        attributes = AttributeResolver(rules).resolve_all(sheet)
        saves = resolve_saves(rules, sheet, attributes, level=2)
        assert saves[SaveKey.HARDINESS].value == 11

    def test_all_saves_present(self, rules, strings, make_sheet):
        """Every save is computed and labelled."""
        sheet = make_sheet()
        attributes = AttributeResolver(rules).resolve_all(sheet)
        saves = resolve_saves(rules, sheet, attributes, level=1, localizer=strings)

        assert set(saves) == set(SaveKey)
        for save in saves.values():
            assert save.value == 15
        assert saves[SaveKey.EVASION].label == "Evasion"

    def test_penalty_carried(self, rules, make_sheet):
        """Stored penalties pass through unchanged and do not alter the target."""
        sheet = make_sheet(saves={"spirit": {"penalty": 2}})
        attributes = AttributeResolver(rules).resolve_all(sheet)
        saves = resolve_saves(rules, sheet, attributes, level=1)
        assert saves[SaveKey.SPIRIT].penalty == 2
        assert saves[SaveKey.SPIRIT].value == 15
        assert saves[SaveKey.HARDINESS].penalty == 0

    def test_higher_level_lowers_target(self, rules, make_sheet):
        """Each level makes saves one easier."""
        sheet = make_sheet()
        attributes = AttributeResolver(rules).resolve_all(sheet)
        low = resolve_saves(rules, sheet, attributes, level=1)
        high = resolve_saves(rules, sheet, attributes, level=5)
        assert high[SaveKey.EVASION].value == low[SaveKey.EVASION].value - 4
