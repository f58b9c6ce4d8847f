"""
Roll request types for godsheet.

A roll request is a formula string, the data context the formula's
``@references`` resolve against, and presentation metadata. The external
evaluator turns it into a result; nothing here rolls dice.
"""

from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from godsheet.config import get_settings


class RollKind(StrEnum):
    """Kinds of roll request."""

    ATTRIBUTE_CHECK = "attribute_check"
    SAVE_CHECK = "save_check"
    ATTACK = "attack"
    DAMAGE = "damage"


class RollType(StrEnum):
    """Save roll variants."""

    NORMAL = "Normal"
    ADVANTAGE = "Advantage"
    DISADVANTAGE = "Disadvantage"


class RollMode(StrEnum):
    """Who gets to see the rolled result."""

    PUBLIC = "roll"
    GM = "gmroll"
    BLIND = "blindroll"
    SELF = "selfroll"


# d20 dice expression per roll variant; kh/kl keep the higher/lower die
D20_FORMULAS = {
    RollType.NORMAL: "1d20",
    RollType.ADVANTAGE: "2d20kh",
    RollType.DISADVANTAGE: "2d20kl",
}


class CheckState(str, Enum):
    """Check dialog flow state."""

    IDLE = "idle"  # Nothing requested yet, or the dialog was dismissed
    AWAITING_SUBMISSION = "awaiting_submission"  # Form shown, waiting on the user
    SUBMITTED = "submitted"  # Options received, roll built and dispatched


def default_roll_mode() -> RollMode:
    try:
        return RollMode(get_settings().default_roll_mode)
    except ValueError:
        return RollMode.PUBLIC


class CheckOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    roll_mode: RollMode = Field(default_factory=default_roll_mode, alias="rollMode")


class AttributeCheckOptions(CheckOptions):
    """
    Submitted attribute check options.

    Attributes:
        relevant_fact: A relevant fact grants advantage
        other_modifiers: Free-text extra term, e.g. "+2" or "- @str.mod"
        difficulty: Difficulty table entry adjusting the target
    """

    relevant_fact: bool = Field(default=False, alias="relevantFact")
    other_modifiers: str = Field(default="", alias="otherModifiers")
    difficulty: str = "Mortal"

    @field_validator("other_modifiers", mode="before")
    @classmethod
    def _text_modifiers(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value)


class SaveCheckOptions(CheckOptions):
    """
    Submitted save check options.

    Attributes:
        roll_type: Normal, Advantage or Disadvantage
        other_modifiers: Flat modifier added to the roll
    """

    roll_type: RollType = Field(default=RollType.NORMAL, alias="rollType")
    other_modifiers: int = Field(default=0, alias="otherModifiers")

    @field_validator("other_modifiers", mode="before")
    @classmethod
    def _blank_is_zero(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value


class DialogConfig(BaseModel):
    """
    What a dialog collaborator needs to render a check form.

    Attributes:
        kind: Check being configured
        title: Window title
        label: Attribute or save label
        choices: Selectable difficulties or roll types, value -> display text
        default_choice: Preselected choice
        roll_modes: Selectable roll modes, value -> display text
        default_roll_mode: Preselected roll mode
        target: Number the roll must reach, when known up front
        button_label: Confirm button text
    """

    model_config = ConfigDict(frozen=True)

    kind: RollKind
    title: str
    label: str
    choices: dict[str, str]
    default_choice: str
    roll_modes: dict[str, str]
    default_roll_mode: RollMode
    target: int | None = None
    button_label: str = "Roll"


class RollRequest(BaseModel):
    """
    A formula ready for the external evaluator.

    Attributes:
        kind: Kind of roll
        formula: Dice formula with ``@`` references into data
        data: Context the references resolve against
        target: Number the total must meet or beat, for checks
        label: What is being rolled
        flavor: Message flavor text
        speaker: Name the result is posted as
        roll_mode: Result visibility
        options: Snapshot of the options the request was built from
    """

    model_config = ConfigDict(frozen=True)

    kind: RollKind
    formula: str
    data: dict[str, Any] = Field(default_factory=dict)
    target: int | None = None
    label: str = ""
    flavor: str = ""
    speaker: str = ""
    roll_mode: RollMode = RollMode.PUBLIC
    options: dict[str, Any] = Field(default_factory=dict)


class DamageRollRequest(RollRequest):
    """A damage roll; straight damage skips the damage conversion table."""

    straight_damage: bool = False
    damage_type: str = ""


class AttackRollRequest(RollRequest):
    """
    An attack roll with its follow-up damage.

    ``formula`` is the attack roll. ``damage_formula`` is the damage roll,
    which is the item's custom formula when ``custom`` is set.
    """

    attack_bonus: str
    damage_bonus: str
    damage_die: str
    damage_formula: str
    straight_damage: bool = False
    damage_type: str = ""
    custom: bool = False
    custom_formula: str = ""
