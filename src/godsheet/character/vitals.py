"""Health and armour class for godsheet."""

import math
from collections.abc import Iterable

from godsheet.character.models import AttributeState, Item, ItemKind, PoolState
from godsheet.rules.tables import RulesTable


def max_health(constitution: AttributeState, level: int) -> int:
    """
    Calculate maximum health.

    Twice the constitution score, plus constitution modifier and half the
    score (rounded up) for every level past the first. Never below 0.

    Examples:
        CON 14 (+2) at level 3: 28 + 2 * (2 + 7) = 46
    """
    per_level = constitution.mod + math.ceil(constitution.value / 2)
    return max(2 * constitution.value + (level - 1) * per_level, 0)


def clamp(value: int, low: int, high: int) -> int:
    """Bound value into [low, high]."""
    return max(low, min(value, high))


def resolve_health(current: int, constitution: AttributeState, level: int) -> PoolState:
    """Compute maximum health and clamp the current value into range."""
    maximum = max_health(constitution, level)
    return PoolState(value=clamp(current, 0, maximum), max=maximum)


def worn_armour(items: Iterable[Item]) -> Item | None:
    """Get the first worn armour item, if any."""
    for item in items:
        if item.kind == ItemKind.ARMOUR and item.worn:
            return item
    return None


def armour_class(
    rules: RulesTable,
    items: Iterable[Item],
    dexterity: AttributeState,
    use_shield: bool,
) -> int:
    """
    Calculate armour class. Lower is better.

    Worn armour sets the base, otherwise the unarmoured baseline applies.
    Dexterity modifier and a carried shield both reduce it.
    """
    armour = worn_armour(items)
    base = armour.base_armour if armour is not None else rules.unarmoured_ac
    return base - dexterity.mod - (rules.shield_bonus if use_shield else 0)
