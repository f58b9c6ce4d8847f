"""Roll requests - formulas, data contexts and check dialog flows."""

from .builder import RollBuilder
from .formulas import append_number, append_term
from .service import CheckFlow, DialogPresenter, RollEvaluator, RollService
from .types import (
    AttackRollRequest,
    AttributeCheckOptions,
    CheckState,
    DamageRollRequest,
    DialogConfig,
    RollKind,
    RollMode,
    RollRequest,
    RollType,
    SaveCheckOptions,
)

__all__ = [
    "AttackRollRequest",
    "AttributeCheckOptions",
    "CheckFlow",
    "CheckState",
    "DamageRollRequest",
    "DialogConfig",
    "DialogPresenter",
    "RollBuilder",
    "RollEvaluator",
    "RollKind",
    "RollMode",
    "RollRequest",
    "RollService",
    "RollType",
    "SaveCheckOptions",
    "append_number",
    "append_term",
]
