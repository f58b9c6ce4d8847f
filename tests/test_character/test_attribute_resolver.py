"""Tests for attribute resolution."""

from godsheet.character import AttributeResolver
from godsheet.rules import AttributeKey


class TestGetModifier:
    """Tests for AttributeResolver.get_modifier."""

    def test_average_scores(self, rules):
        """Scores of 10 and 11 have no modifier."""
        resolver = AttributeResolver(rules)
        assert resolver.get_modifier(10) == 0
        assert resolver.get_modifier(11) == 0

    def test_high_and_low_scores(self, rules):
        """The curve runs from -4 to +4."""
        resolver = AttributeResolver(rules)
        assert resolver.get_modifier(3) == -4
        assert resolver.get_modifier(8) == -1
        assert resolver.get_modifier(14) == 2
        assert resolver.get_modifier(16) == 3
        assert resolver.get_modifier(19) == 4

    def test_out_of_range_counts_as_zero(self, rules):
        """Scores without a row contribute nothing."""
        resolver = AttributeResolver(rules)
        assert resolver.get_modifier(0) == 0
        assert resolver.get_modifier(25) == 0


class TestResolve:
    """Tests for resolving a single attribute."""

    def test_valid_score(self, rules, strings):
        """A valid score keeps its value and gets mod, check and labels."""
        state = AttributeResolver(rules, strings).resolve(AttributeKey.STR, 14)
        assert state.value == 14
        assert state.mod == 2
        assert state.check == 7
        assert state.label == "Strength"
        assert state.abbr == "STR"

    def test_check_is_base_minus_score(self, rules):
        """Check target falls as the score rises."""
        resolver = AttributeResolver(rules)
        for score in range(3, 20):
            assert resolver.resolve(AttributeKey.DEX, score).check == 21 - score

    def test_out_of_range_resets_to_default(self, rules):
        """Corrupt scores reset to 10 with modifier 0 instead of failing."""
        resolver = AttributeResolver(rules)
        for score in (-1, 0, 2, 20, 99):
            state = resolver.resolve(AttributeKey.CON, score)
            assert state.value == 10
            assert state.mod == 0
            assert state.check == 11

    def test_labels_fall_back_to_key(self, rules):
        """Without a localizer the raw key is the label."""
        state = AttributeResolver(rules).resolve(AttributeKey.WIS, 12)
        assert state.label == "wis"
        assert state.abbr == "wis"


class TestResolveAll:
    """Tests for resolving every attribute of a sheet."""

    def test_resolves_every_key(self, rules, make_sheet):
        """All six attributes are present; missing ones default to 10."""
        sheet = make_sheet(attributes={"str": 16, "cha": 5})
        states = AttributeResolver(rules).resolve_all(sheet)

        assert set(states) == set(AttributeKey)
        assert states[AttributeKey.STR].mod == 3
        assert states[AttributeKey.CHA].mod == -3
        assert states[AttributeKey.INT].value == 10
