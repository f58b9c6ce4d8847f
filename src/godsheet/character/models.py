"""
Character sheet models for godsheet.

CharacterSheet and Item hold the stored inputs the host hands over. Field
names are snake_case; the host's camelCase spellings are accepted as aliases.
DerivedState is written fresh by every derivation pass.
"""

from enum import IntEnum, StrEnum
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from godsheet.rules.tables import (
    ATTRIBUTE_KEYS,
    SAVE_KEYS,
    AdvancementRequirement,
    AttributeKey,
    SaveKey,
)

logger = structlog.get_logger(__name__)


class ItemKind(StrEnum):
    """Kinds of owned items the core reads."""

    ARMOUR = "armour"
    WORD = "word"
    PROJECT = "project"
    GIFT = "gift"
    WEAPON = "weapon"


class FrayDie(IntEnum):
    """Allowed fray die sizes."""

    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12


def _none_to_zero(value: Any) -> Any:
    return 0 if value is None else value


def _none_to_false(value: Any) -> Any:
    return False if value is None else value


class InputModel(BaseModel):
    """Base for host-supplied records: camelCase aliases, unknown keys kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ItemCost(InputModel):
    """Dominion and influence committed to a word or project."""

    dominion: int = 0
    influence: int = 0

    @field_validator("dominion", "influence", mode="before")
    @classmethod
    def _zero_missing(cls, value: Any) -> Any:
        return _none_to_zero(value)


class Item(InputModel):
    """
    An owned item as seen by the core.

    Only the fields for the item's kind matter; the rest keep their defaults.
    Null numeric fields count as zero.
    """

    id: str = Field(..., description="Host identifier of the item")
    name: str = Field(default="", description="Display name")
    kind: ItemKind = Field(..., alias="type", description="Item kind")

    # armour
    worn: bool = False
    base_armour: int = Field(default=9, alias="baseArmour")

    # word / project
    cost: ItemCost = Field(default_factory=ItemCost)
    effort_of_the_word: bool = Field(default=False, alias="effortOfTheWord")
    influence_of_the_word: bool = Field(default=False, alias="influenceOfTheWord")

    # word / gift
    effort: int = 0

    # weapon / gift attacks
    attribute: AttributeKey = AttributeKey.STR
    damage_die: str = Field(default="1d8", alias="damageDie")
    hit_bonus: int = Field(default=0, alias="hitBonus")
    damage_bonus: int = Field(default=0, alias="damageBonus")
    straight_damage: bool = Field(default=False, alias="straightDamage")
    damage_type: str = Field(default="", alias="damageType")
    is_custom_type: bool = Field(default=False, alias="isCustomType")
    custom_formula: str = Field(default="", alias="customFormula")

    @model_validator(mode="before")
    @classmethod
    def _flatten_host_record(cls, data: Any) -> Any:
        # Host records look like {"_id", "name", "type", "system": {...}}
        if not isinstance(data, dict):
            return data
        flat = {key: value for key, value in data.items() if key != "system"}
        if isinstance(data.get("system"), dict):
            flat.update(data["system"])
        if "id" not in flat and "_id" in flat:
            flat["id"] = flat.pop("_id")
        return flat

    @field_validator("effort", "hit_bonus", "damage_bonus", mode="before")
    @classmethod
    def _zero_missing(cls, value: Any) -> Any:
        return _none_to_zero(value)

    @field_validator(
        "worn",
        "effort_of_the_word",
        "influence_of_the_word",
        "straight_damage",
        "is_custom_type",
        mode="before",
    )
    @classmethod
    def _false_missing(cls, value: Any) -> Any:
        return _none_to_false(value)

    @field_validator("attribute", mode="before")
    @classmethod
    def _default_attribute(cls, value: Any) -> Any:
        return AttributeKey.STR if value in (None, "") else value

    @field_validator("cost", mode="before")
    @classmethod
    def _default_cost(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("damage_type", "custom_formula", mode="before")
    @classmethod
    def _empty_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_attack_item(self) -> bool:
        """Check if the item can be used for an attack roll."""
        return self.kind in (ItemKind.WEAPON, ItemKind.GIFT)


class AttributeScore(InputModel):
    """Raw attribute score."""

    value: int = 10


class SaveInput(InputModel):
    """Stored save data; the target itself is always derived."""

    penalty: int = 0


class LevelProgress(InputModel):
    value: int = 1
    xp: int = 0


class Movement(InputModel):
    land: int = 30
    burrow: int = 0
    fly: int = 0
    swim: int = 0


class Details(InputModel):
    level: LevelProgress = Field(default_factory=LevelProgress)
    move: Movement = Field(default_factory=Movement)
    fray_die: FrayDie = Field(default=FrayDie.D8, alias="frayDie")
    wealth: int = 0

    @field_validator("fray_die", mode="before")
    @classmethod
    def _coerce_fray_die(cls, value: Any) -> Any:
        # Hosts store the die size as a string choice ("8")
        if isinstance(value, str) and value.strip().lstrip("d").isdigit():
            return int(value.strip().lstrip("d"))
        return value


class Pool(InputModel):
    """A current/maximum pair."""

    value: int = 0
    max: int = 0


class Dominion(InputModel):
    gained: int = 0
    income: int = 0
    spent: int = 0


class Resources(InputModel):
    effort: Pool = Field(default_factory=lambda: Pool(value=2, max=2))
    influence: Pool = Field(default_factory=lambda: Pool(value=2, max=2))
    dominion: Dominion = Field(default_factory=Dominion)


class CharacterSheet(InputModel):
    """
    Stored inputs of a character.

    Attributes:
        name: Character name, used in roll flavor text
        attributes: Raw scores for every attribute (missing ones default to 10)
        saves: Stored save data (penalties) for every save
        details: Level progress, movement, fray die and wealth
        resources: Effort, influence and dominion records
        health: Current and maximum health
        use_shield: Whether a shield is carried
        items: Owned items of the kinds the core reads; other kinds are dropped
    """

    name: str = ""
    attributes: dict[AttributeKey, AttributeScore] = Field(default_factory=dict)
    saves: dict[SaveKey, SaveInput] = Field(default_factory=dict)
    details: Details = Field(default_factory=Details)
    resources: Resources = Field(default_factory=Resources)
    health: Pool = Field(default_factory=lambda: Pool(value=8, max=8))
    use_shield: bool = Field(default=False, alias="useShield")
    items: list[Item] = Field(default_factory=list)

    @field_validator("attributes", mode="before")
    @classmethod
    def _accept_bare_scores(cls, value: Any) -> Any:
        # {"str": 12} is shorthand for {"str": {"value": 12}}
        if isinstance(value, dict):
            return {
                key: {"value": score} if isinstance(score, int) else score
                for key, score in value.items()
            }
        return value

    @field_validator("items", mode="before")
    @classmethod
    def _skip_foreign_items(cls, value: Any) -> Any:
        # Hosts own item kinds the core never reads (loot, features, ...)
        if not isinstance(value, list):
            return value
        known = {kind.value for kind in ItemKind}
        kept = []
        for item in value:
            kind = item.get("type", item.get("kind")) if isinstance(item, dict) else None
            if isinstance(kind, str) and kind not in known:
                logger.debug(
                    "foreign_item_skipped", item_id=item.get("id", item.get("_id")), kind=kind
                )
                continue
            kept.append(item)
        return kept

    @model_validator(mode="after")
    def _fill_fixed_keys(self) -> "CharacterSheet":
        for key in ATTRIBUTE_KEYS:
            self.attributes.setdefault(key, AttributeScore())
        for save_key in SAVE_KEYS:
            self.saves.setdefault(save_key, SaveInput())
        return self

    def get_item(self, item_id: str) -> Item | None:
        """
        Get an owned item by id.

        Args:
            item_id: Host identifier of the item

        Returns:
            The Item, or None if not owned
        """
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def items_of_kind(self, *kinds: ItemKind) -> list[Item]:
        """Get owned items of any of the given kinds, in owned order."""
        return [item for item in self.items if item.kind in kinds]


# ============================================================================
# Derived state
# ============================================================================


class DerivedModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class AttributeState(DerivedModel):
    """Derived record for one attribute."""

    value: int
    mod: int
    check: int
    label: str
    abbr: str


class SaveState(DerivedModel):
    """Derived record for one save."""

    value: int
    label: str
    penalty: int = 0


class PoolState(DerivedModel):
    value: int
    max: int


class DominionState(DerivedModel):
    gained: int
    income: int
    spent: int


class AdvancementTotals(DerivedModel):
    """What the owned words and projects add up to."""

    dominion_spent: int = 0
    influence_used: int = 0
    bonus_effort: int = 0
    bonus_influence: int = 0


class DerivedState(DerivedModel):
    """
    Everything a derivation pass computes.

    ``advancement`` holds the requirements for the next level, or None once
    the character has reached the table's maximum level.
    """

    attributes: dict[AttributeKey, AttributeState]
    saves: dict[SaveKey, SaveState]
    level: int
    advancement: AdvancementRequirement | None
    totals: AdvancementTotals
    effort: PoolState
    influence: PoolState
    dominion: DominionState
    health: PoolState
    ac: int

    @property
    def at_level_cap(self) -> bool:
        """Check if no further advancement is possible."""
        return self.advancement is None
