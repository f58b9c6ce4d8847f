"""Shared fixtures for all tests."""

from typing import Any

import pytest
import structlog

from godsheet.character import Character, CharacterSheet
from godsheet.config import get_settings
from godsheet.i18n import DEFAULT_STRINGS_FILE, StringTable
from godsheet.rules import RulesTable, load_rules
from godsheet.rules.loader import get_default_rules


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent of the developer's environment and cached settings.

    Clears GODSHEET_* variables and resets the cached settings, rules and
    logging configuration so every test starts from the packaged defaults.
    """
    import os

    for name in list(os.environ):
        if name.startswith("GODSHEET_"):
            monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    get_default_rules.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_rules.cache_clear()
    # configure_logging binds the current stderr, which capsys closes after the test
    structlog.reset_defaults()


@pytest.fixture
def rules() -> RulesTable:
    """The packaged rules tables."""
    return load_rules()


@pytest.fixture
def strings() -> StringTable:
    """The packaged English string table."""
    return StringTable.from_file(DEFAULT_STRINGS_FILE)


@pytest.fixture
def make_sheet():
    """Factory for character sheets with readable keyword overrides.

    Example:
        make_sheet(attributes={"con": 14}, xp=6, items=[...])
    """

    def _make(
        name: str = "Aurelia",
        attributes: dict[str, int] | None = None,
        xp: int = 0,
        items: list[dict[str, Any]] | None = None,
        health: int = 8,
        use_shield: bool = False,
        **extra: Any,
    ) -> CharacterSheet:
        data: dict[str, Any] = {
            "name": name,
            "attributes": attributes or {},
            "details": {"level": {"value": 1, "xp": xp}},
            "health": {"value": health, "max": 8},
            "useShield": use_shield,
            "items": items or [],
        }
        data.update(extra)
        return CharacterSheet.model_validate(data)

    return _make


@pytest.fixture
def make_character(rules, strings, make_sheet):
    """Factory for derived characters using the packaged rules and strings."""

    def _make(**kwargs: Any) -> Character:
        return Character(make_sheet(**kwargs), rules=rules, localizer=strings)

    return _make


@pytest.fixture
def longsword() -> dict[str, Any]:
    """A plain strength weapon."""
    return {
        "id": "sword1",
        "name": "Longsword",
        "type": "weapon",
        "attribute": "str",
        "damageDie": "1d8",
    }


@pytest.fixture
def word_of_fire() -> dict[str, Any]:
    """A word with a dominion cost and an effort-of-the-word bonus."""
    return {
        "id": "word-fire",
        "name": "Word of Fire",
        "type": "word",
        "cost": {"dominion": 10, "influence": 1},
        "effortOfTheWord": True,
        "effort": 1,
    }
