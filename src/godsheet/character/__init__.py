"""Character sheets, derived state and the derivation pipeline."""

from .attributes import AttributeResolver
from .derivation import Character, Derivable, DerivationPipeline, apply_derived
from .equipment import toggle_shield, wear_armour
from .loader import load_sheet
from .models import (
    AttributeState,
    CharacterSheet,
    DerivedState,
    FrayDie,
    Item,
    ItemKind,
    PoolState,
    SaveState,
)

__all__ = [
    "AttributeResolver",
    "AttributeState",
    "Character",
    "CharacterSheet",
    "Derivable",
    "DerivationPipeline",
    "DerivedState",
    "FrayDie",
    "Item",
    "ItemKind",
    "PoolState",
    "SaveState",
    "apply_derived",
    "load_sheet",
    "toggle_shield",
    "wear_armour",
]
