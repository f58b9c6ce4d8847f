"""Static rules tables - attribute curve, advancement, saves and difficulties."""

from .loader import get_default_rules, load_rules
from .tables import (
    ATTRIBUTE_KEYS,
    SAVE_KEYS,
    AdvancementRequirement,
    AdvancementTier,
    AttributeKey,
    ModifierRow,
    RulesTable,
    SaveKey,
    ScoreRange,
)

__all__ = [
    "ATTRIBUTE_KEYS",
    "SAVE_KEYS",
    "AdvancementRequirement",
    "AdvancementTier",
    "AttributeKey",
    "ModifierRow",
    "RulesTable",
    "SaveKey",
    "ScoreRange",
    "get_default_rules",
    "load_rules",
]
