"""
Character sheet loader for godsheet.

Reads a character sheet exported by the host from a YAML (or JSON) file.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from godsheet.character.models import CharacterSheet
from godsheet.errors import SheetLoadError


def load_sheet_data(file_path: Path) -> dict[str, Any]:
    """
    Load the raw mapping of a character sheet file.

    Args:
        file_path: Path to the sheet file

    Returns:
        Parsed sheet mapping; a top-level ``system`` key is unwrapped

    Raises:
        SheetLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SheetLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise SheetLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise SheetLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise SheetLoadError(f"Empty sheet file: {file_path}")

    if not isinstance(data, dict):
        raise SheetLoadError(f"Sheet must be a mapping in {file_path}")

    # Host exports nest the sheet fields under "system" beside name and items
    if isinstance(data.get("system"), dict):
        system = dict(data["system"])
        for key in ("name", "items"):
            if key in data:
                system.setdefault(key, data[key])
        data = system

    return data


def load_sheet(file_path: Path) -> CharacterSheet:
    """
    Load and validate a character sheet.

    Raises:
        SheetLoadError: If loading or validation fails
    """
    data = load_sheet_data(file_path)
    try:
        return CharacterSheet.model_validate(data)
    except ValidationError as e:
        raise SheetLoadError(f"Invalid character sheet in {file_path}: {e}") from e
