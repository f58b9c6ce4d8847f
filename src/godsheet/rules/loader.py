"""
Rules loader module for godsheet.

Handles loading and validating the rules tables from YAML files.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from godsheet.config import get_settings
from godsheet.errors import RulesLoadError, RulesValidationError
from godsheet.rules.tables import AdvancementTier, ModifierRow, RulesTable, SaveKey

logger = structlog.get_logger(__name__)

REQUIRED_SECTIONS = ["attributes", "advancement"]
OPTIONAL_SECTIONS = ["saves", "armour", "resources", "difficulties"]

DEFAULT_RULES_FILE = Path(__file__).parent.parent / "data" / "rules.yaml"


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML file containing rules tables.

    Args:
        file_path: Path to the YAML file

    Returns:
        The parsed rules mapping

    Raises:
        RulesLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise RulesLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise RulesLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise RulesLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict):
        raise RulesLoadError(f"Rules file must contain a mapping: {file_path}")

    return data


def validate_rules_data(data: dict[str, Any], file_path: Path) -> None:
    """
    Validate the shape of a rules mapping before building models from it.

    Args:
        data: Parsed rules mapping
        file_path: Path to the source file (for error messages)

    Raises:
        RulesValidationError: If required sections are missing or malformed
    """
    for section in REQUIRED_SECTIONS:
        if section not in data:
            raise RulesValidationError(f"{file_path} missing required section: {section}")

    attributes = data["attributes"]
    if not isinstance(attributes, dict) or not isinstance(attributes.get("modifiers"), list):
        raise RulesValidationError(f"'attributes.modifiers' must be a list in {file_path}")

    if not isinstance(data["advancement"], list) or not data["advancement"]:
        raise RulesValidationError(f"'advancement' must be a non-empty list in {file_path}")

    for section in OPTIONAL_SECTIONS:
        if not isinstance(data.get(section) or {}, dict):
            raise RulesValidationError(f"'{section}' must be a mapping in {file_path}")

    save_attributes = (data.get("saves") or {}).get("attributes")
    if save_attributes is None:
        return
    if not isinstance(save_attributes, dict):
        raise RulesValidationError(f"'saves.attributes' must be a mapping in {file_path}")

    known = {key.value for key in SaveKey}
    for save_key in save_attributes:
        if save_key not in known:
            raise RulesValidationError(f"Unknown save '{save_key}' in {file_path}")

    # Every save needs an attribute pair
    missing = sorted(known - set(save_attributes))
    if missing:
        raise RulesValidationError(
            f"'saves.attributes' missing saves {', '.join(missing)} in {file_path}"
        )


def _check_modifier_curve(rules: RulesTable, file_path: Path) -> None:
    """Every valid score needs exactly one row, and modifiers may not decrease."""
    previous: int | None = None
    for score in range(rules.score_min, rules.score_max + 1):
        rows = [row for row in rules.modifiers if row.score.contains(score)]
        if len(rows) != 1:
            raise RulesValidationError(
                f"Score {score} matches {len(rows)} modifier rows in {file_path} (expected 1)"
            )
        modifier = rows[0].modifier
        if previous is not None and modifier < previous:
            raise RulesValidationError(
                f"Modifier curve decreases at score {score} in {file_path}"
            )
        previous = modifier

    if rules.default_score < rules.score_min or rules.default_score > rules.score_max:
        raise RulesValidationError(f"default_score lies outside the valid range in {file_path}")


def _check_advancement(rules: RulesTable, file_path: Path) -> None:
    """Levels must run 1, 2, 3... with requirements that never decrease."""
    for index, tier in enumerate(rules.advancement):
        if tier.level != index + 1:
            raise RulesValidationError(
                f"Advancement tiers must be consecutive from level 1 in {file_path} "
                f"(found level {tier.level} at position {index + 1})"
            )
        if index == 0:
            continue
        prior = rules.advancement[index - 1].requirements
        current = tier.requirements
        if current.xp < prior.xp or current.dominion_spent < prior.dominion_spent:
            raise RulesValidationError(
                f"Advancement requirements decrease at level {tier.level} in {file_path}"
            )


def create_rules_from_data(data: dict[str, Any], file_path: Path) -> RulesTable:
    """
    Create a RulesTable from a parsed rules mapping.

    Args:
        data: Parsed rules mapping
        file_path: Path to the source file (for error messages)

    Returns:
        RulesTable instance

    Raises:
        RulesValidationError: If Pydantic validation or a table consistency check fails
    """
    attributes = data["attributes"]
    saves = data.get("saves") or {}
    armour = data.get("armour") or {}
    resources = data.get("resources") or {}
    difficulties = data.get("difficulties") or {}

    fields: dict[str, Any] = {
        "modifiers": [ModifierRow.model_validate(row) for row in attributes["modifiers"]],
        "advancement": [AdvancementTier.model_validate(tier) for tier in data["advancement"]],
    }
    optional = {
        "score_min": attributes.get("score_min"),
        "score_max": attributes.get("score_max"),
        "default_score": attributes.get("default_score"),
        "check_base": attributes.get("check_base"),
        "save_base": saves.get("base"),
        "save_attributes": saves.get("attributes"),
        "unarmoured_ac": armour.get("unarmoured"),
        "shield_bonus": armour.get("shield_bonus"),
        "base_effort": resources.get("base_effort"),
        "base_influence": resources.get("base_influence"),
        "difficulties": difficulties.get("adjustments"),
        "default_difficulty": difficulties.get("default"),
    }
    fields.update({name: value for name, value in optional.items() if value is not None})

    try:
        rules = RulesTable.model_validate(fields)
    except ValidationError as e:
        raise RulesValidationError(f"Failed to create rules from {file_path}: {e}") from e

    _check_modifier_curve(rules, file_path)
    _check_advancement(rules, file_path)

    if rules.default_difficulty not in rules.difficulties:
        raise RulesValidationError(
            f"Default difficulty '{rules.default_difficulty}' not in difficulty table "
            f"in {file_path}"
        )

    return rules


def load_rules(file_path: Path | None = None) -> RulesTable:
    """
    Load and validate a rules file.

    This is the main entry point for loading rules tables.

    Args:
        file_path: Path to a rules YAML file. If None, uses the packaged tables.

    Returns:
        The validated RulesTable

    Raises:
        RulesLoadError: If loading fails
        RulesValidationError: If validation fails
    """
    if file_path is None:
        file_path = DEFAULT_RULES_FILE

    data = load_yaml_file(file_path)
    validate_rules_data(data, file_path)
    rules = create_rules_from_data(data, file_path)

    logger.debug(
        "rules_loaded",
        path=str(file_path),
        max_level=rules.max_level,
        modifier_rows=len(rules.modifiers),
    )

    return rules


@lru_cache
def get_default_rules() -> RulesTable:
    """Get the cached rules table named by settings, or the packaged one."""
    return load_rules(get_settings().rules_path)
