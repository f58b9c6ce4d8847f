"""
Localization lookup for godsheet.

The core only needs key -> display string with a fallback; the string table
here covers the packaged English labels and can be swapped for any object
satisfying the Localizer protocol.
"""

from pathlib import Path
from typing import Any, Protocol

import yaml

from godsheet.config import get_settings
from godsheet.errors import GodsheetError

DEFAULT_STRINGS_FILE = Path(__file__).parent / "data" / "strings.yaml"


class Localizer(Protocol):
    """Looks up display strings by key."""

    def lookup(self, key: str) -> str | None:
        """Return the display string for key, or None if unresolved."""
        ...


class StringTable:
    """Flat key -> string mapping built from a nested YAML document."""

    def __init__(self, strings: dict[str, str] | None = None) -> None:
        self._strings: dict[str, str] = dict(strings or {})

    @classmethod
    def from_file(cls, file_path: Path) -> "StringTable":
        """
        Load a string table from YAML.

        Nested mappings are flattened into dotted keys, so
        ``attributes: {str: {label: Strength}}`` becomes ``attributes.str.label``.

        Raises:
            GodsheetError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise GodsheetError(f"Error loading strings from {file_path}: {e}") from e

        return cls(_flatten(data))

    def lookup(self, key: str) -> str | None:
        return self._strings.get(key)

    def __len__(self) -> int:
        return len(self._strings)


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = str(value)
    return flat


def localize(localizer: Localizer | None, key: str, fallback: str) -> str:
    """
    Resolve a display string, falling back when the key is unresolved.

    Args:
        localizer: Lookup to consult; None means nothing resolves
        key: String-table key
        fallback: Value returned when the key has no (non-empty) entry

    Returns:
        The localized string or the fallback
    """
    if localizer is None:
        return fallback
    value = localizer.lookup(key)
    return value if value else fallback


def format_string(localizer: Localizer | None, key: str, fallback: str, **values: Any) -> str:
    """Localize a template string and fill its ``{placeholders}``."""
    return localize(localizer, key, fallback).format(**values)


def load_default_strings() -> StringTable:
    """Load the string table named by settings, or the packaged English table."""
    path = get_settings().strings_path or DEFAULT_STRINGS_FILE
    return StringTable.from_file(path)
