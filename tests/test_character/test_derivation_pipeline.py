"""Tests for the full derivation pass and the Character wrapper."""

import pytest

from godsheet.character import Character, Derivable, DerivationPipeline
from godsheet.rules import AttributeKey, SaveKey


@pytest.fixture
def veteran(make_character, word_of_fire):
    """A level 3 character with a word costing enough dominion to qualify."""
    word = dict(word_of_fire, cost={"dominion": 15, "influence": 1})
    return make_character(
        attributes={"con": 14, "str": 12, "dex": 14},
        xp=6,
        items=[word],
        health=100,
    )


class TestDerivable:
    """Tests for the source/derived pairing."""

    def test_refresh_replaces_both(self):
        """refresh() stores the corrected source and the derived value."""
        entity = Derivable(3, lambda source: (source + 1, source * 10))
        assert entity.derived is None

        assert entity.refresh() == 30
        assert entity.source == 4
        assert entity.derived == 30


class TestDerivationPass:
    """Tests for a complete pass over a sheet."""

    def test_scenario_values(self, veteran):
        """Level, health, saves and armour class follow the game's formulas."""
        derived = veteran.derived
        assert derived.level == 3
        assert derived.health.max == 46
        assert derived.health.value == 46
        assert derived.saves[SaveKey.HARDINESS].value == 16 - (2 + 3)
        assert derived.ac == 7
        assert derived.effort.max == 3 - 1 + 2 + 1
        assert derived.effort.value == derived.effort.max - 1
        assert derived.influence.value == derived.influence.max - 1
        assert derived.dominion.spent == 15

    def test_sheet_corrected(self, veteran):
        """Stored values are rewritten to agree with the derived state."""
        sheet = veteran.sheet
        assert sheet.details.level.value == 3
        assert sheet.health.value == 46
        assert sheet.health.max == 46
        assert sheet.resources.effort.max == veteran.derived.effort.max
        assert sheet.resources.dominion.spent == 15

    def test_corrupt_attribute_reset_on_sheet(self, make_character):
        """An out-of-range score is reset to 10 on the stored sheet."""
        character = make_character(attributes={"str": 30})
        assert character.sheet.attributes[AttributeKey.STR].value == 10
        assert character.derived.attributes[AttributeKey.STR].check == 11

    def test_idempotent(self, veteran):
        """A second pass changes neither the sheet nor the derived state."""
        first_sheet = veteran.sheet.model_dump()
        first_derived = veteran.derived

        second_derived = veteran.prepare_derived_data()

        assert veteran.sheet.model_dump() == first_sheet
        assert second_derived == first_derived

    def test_invariants(self, make_character, word_of_fire, longsword):
        """Bounds hold for a spread of inputs."""
        for con in (3, 8, 14, 19):
            for xp in (0, 6, 40, 200):
                character = make_character(
                    attributes={"con": con},
                    xp=xp,
                    items=[word_of_fire, longsword],
                    health=-10 if xp % 2 else 500,
                )
                derived = character.derived
                assert 0 <= derived.health.value <= derived.health.max
                assert 0 <= derived.effort.value <= derived.effort.max
                assert 1 <= derived.level <= 10
                for state in derived.attributes.values():
                    assert 3 <= state.value <= 19

    def test_foreign_items_do_not_block_pass(self, make_character, longsword):
        """A host item of an unknown kind is ignored by the pass."""
        character = make_character(
            items=[longsword, {"id": "loot1", "name": "Silver Idol", "type": "item"}]
        )
        assert character.derived.level == 1
        assert character.sheet.get_item("loot1") is None

    def test_derive_does_not_mutate(self, rules, make_sheet):
        """derive() leaves its input alone."""
        sheet = make_sheet(attributes={"dex": 1}, health=500)
        DerivationPipeline(rules).derive(sheet)
        assert sheet.attributes[AttributeKey.DEX].value == 1
        assert sheet.health.value == 500


class TestCharacter:
    """Tests for the Character wrapper."""

    def test_uses_default_rules(self, make_sheet):
        """Without explicit rules the packaged tables apply."""
        character = Character(make_sheet(attributes={"con": 14}))
        assert character.derived.health.max == 28

    def test_equip_waits_for_next_pass(self, make_character):
        """Toggling the shield changes armour class only after a pass."""
        character = make_character()
        assert character.derived.ac == 9

        assert character.toggle_shield() is True
        assert character.derived.ac == 9

        character.prepare_derived_data()
        assert character.derived.ac == 8

    def test_roll_data(self, make_character):
        """Formula data exposes each attribute record and the level."""
        character = make_character(attributes={"str": 16}, xp=3)
        data = character.get_roll_data()
        assert data["str"]["mod"] == 3
        assert data["str"]["value"] == 16
        assert data["lvl"] == 2
        assert set(data) == {key.value for key in AttributeKey} | {"lvl"}

    def test_repr(self, make_character):
        """repr names the character and level."""
        assert repr(make_character(name="Iskra")) == "<Character(name='Iskra', level=1)>"
