"""
Rule tables for godsheet.

Defines the fixed attribute and save keys and the immutable RulesTable value
that every resolver receives at construction time.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AttributeKey(StrEnum):
    """Core character attributes, keyed the way formulas reference them."""

    STR = "str"
    DEX = "dex"
    CON = "con"
    INT = "int"
    WIS = "wis"
    CHA = "cha"


class SaveKey(StrEnum):
    """Saving throws."""

    HARDINESS = "hardiness"
    EVASION = "evasion"
    SPIRIT = "spirit"


ATTRIBUTE_KEYS = list(AttributeKey)
SAVE_KEYS = list(SaveKey)


class ScoreRange(BaseModel):
    """Inclusive range of attribute scores sharing one modifier."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int

    def contains(self, score: int) -> bool:
        """Check if a score falls inside this range."""
        return self.min <= score <= self.max


class ModifierRow(BaseModel):
    """One row of the score-to-modifier curve."""

    model_config = ConfigDict(frozen=True)

    score: ScoreRange
    modifier: int


class AdvancementRequirement(BaseModel):
    """What a character needs to reach a level."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    xp: int = Field(default=0, ge=0, description="Total experience required")
    dominion_spent: int = Field(
        default=0, ge=0, alias="dominionSpent", description="Total dominion spent required"
    )


class AdvancementTier(BaseModel):
    """A level and the requirements to reach it."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    requirements: AdvancementRequirement


class RulesTable(BaseModel):
    """
    Immutable static rules data.

    Attributes:
        modifiers: Score-to-modifier curve, ordered by score
        advancement: Advancement tiers, ordered by level
        score_min: Lowest valid attribute score
        score_max: Highest valid attribute score
        default_score: Score a corrupt attribute is reset to
        check_base: Attribute check target is check_base - score
        save_base: Save target is save_base - (save modifier + level)
        save_attributes: The two attributes whose better modifier drives each save
        unarmoured_ac: Armour class with no armour worn
        shield_bonus: Armour class improvement from a shield
        base_effort: Effort at level 1 before bonuses
        base_influence: Influence at level 1 before bonuses
        difficulties: Attribute check difficulty name to target adjustment
        default_difficulty: Difficulty preselected in check dialogs
    """

    model_config = ConfigDict(frozen=True)

    modifiers: tuple[ModifierRow, ...]
    advancement: tuple[AdvancementTier, ...]
    score_min: int = 3
    score_max: int = 19
    default_score: int = 10
    check_base: int = 21
    save_base: int = 16
    save_attributes: dict[SaveKey, tuple[AttributeKey, AttributeKey]] = Field(
        default_factory=lambda: {
            SaveKey.HARDINESS: (AttributeKey.CON, AttributeKey.STR),
            SaveKey.EVASION: (AttributeKey.DEX, AttributeKey.INT),
            SaveKey.SPIRIT: (AttributeKey.WIS, AttributeKey.CHA),
        }
    )
    unarmoured_ac: int = 9
    shield_bonus: int = 1
    base_effort: int = 2
    base_influence: int = 2
    difficulties: dict[str, int] = Field(default_factory=lambda: {"Mortal": 0})
    default_difficulty: str = "Mortal"

    @property
    def max_level(self) -> int:
        """Get the highest level the advancement table reaches."""
        return max(tier.level for tier in self.advancement)

    def is_valid_score(self, score: int) -> bool:
        """Check if an attribute score lies inside the valid domain."""
        return self.score_min <= score <= self.score_max

    def modifier_for(self, score: int) -> int | None:
        """
        Look up the modifier for an attribute score.

        Args:
            score: Raw attribute score

        Returns:
            The modifier of the row containing score, or None if no row does
        """
        for row in self.modifiers:
            if row.score.contains(score):
                return row.modifier
        return None

    def tier_for(self, level: int) -> AdvancementTier | None:
        """Get the advancement tier for a level, if the table has one."""
        for tier in self.advancement:
            if tier.level == level:
                return tier
        return None

    def difficulty_adjustment(self, difficulty: str) -> int:
        """
        Get the target adjustment for a check difficulty.

        Unknown difficulties adjust nothing.
        """
        return self.difficulties.get(difficulty, 0)
