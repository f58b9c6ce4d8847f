"""Tests for formula string helpers."""

from godsheet.rolls import append_number, append_term


class TestAppendTerm:
    """Tests for append_term."""

    def test_unsigned_term_is_added(self):
        """Bare terms get a plus sign."""
        assert append_term("1d20", "2") == "1d20 + 2"
        assert append_term("1d20", "@str.mod") == "1d20 + @str.mod"

    def test_signed_terms_keep_sign(self):
        """Leading signs are kept and spaced."""
        assert append_term("1d20", "+3") == "1d20 + 3"
        assert append_term("1d20", "- @str.mod") == "1d20 - @str.mod"

    def test_blank_terms_ignored(self):
        """Empty, whitespace and lone signs leave the formula alone."""
        assert append_term("2d20kh", "") == "2d20kh"
        assert append_term("2d20kh", "   ") == "2d20kh"
        assert append_term("2d20kh", "+") == "2d20kh"


class TestAppendNumber:
    """Tests for append_number."""

    def test_zero_omitted(self):
        """Zero adds no term."""
        assert append_number("1d20", 0) == "1d20"

    def test_signs(self):
        """Positive and negative values are spelled out with their sign."""
        assert append_number("1d20", 3) == "1d20 + 3"
        assert append_number("1d20", -2) == "1d20 - 2"
