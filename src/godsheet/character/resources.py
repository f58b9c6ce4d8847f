"""Effort, influence and dominion pools for godsheet."""

from collections.abc import Iterable

from godsheet.character.models import (
    AdvancementTotals,
    Dominion,
    DominionState,
    Item,
    ItemKind,
    PoolState,
)
from godsheet.rules.tables import RulesTable

# Item kinds that commit effort
EFFORT_KINDS = (ItemKind.WORD, ItemKind.GIFT)


def effort_max(rules: RulesTable, level: int, bonus_effort: int) -> int:
    """Effort cap: one per level past the first, on top of the base."""
    return level - 1 + rules.base_effort + bonus_effort


def influence_max(rules: RulesTable, level: int, bonus_influence: int) -> int:
    """Influence cap: one per level past the first, on top of the base."""
    return level - 1 + rules.base_influence + bonus_influence


def remaining_effort(maximum: int, items: Iterable[Item]) -> int:
    """
    Effort left after every owned word and gift takes its share.

    Each commitment only consumes down to zero, so the result is
    ``max(0, maximum - total committed)`` whatever the item order.
    """
    value = maximum
    for item in items:
        if item.kind in EFFORT_KINDS:
            value = max(value - max(item.effort, 0), 0)
    return min(value, max(maximum, 0))


def resolve_resources(
    rules: RulesTable,
    level: int,
    totals: AdvancementTotals,
    items: Iterable[Item],
    dominion: Dominion,
) -> tuple[PoolState, PoolState, DominionState]:
    """
    Compute the effort, influence and dominion records.

    Influence is not floored: committing more than the cap leaves a negative
    remainder so the over-commitment stays visible.

    Returns:
        Tuple of (effort, influence, dominion)
    """
    effort_cap = effort_max(rules, level, totals.bonus_effort)
    influence_cap = influence_max(rules, level, totals.bonus_influence)

    effort = PoolState(value=remaining_effort(effort_cap, items), max=effort_cap)
    influence = PoolState(value=influence_cap - totals.influence_used, max=influence_cap)
    dominion_state = DominionState(
        gained=dominion.gained,
        income=dominion.income,
        spent=totals.dominion_spent,
    )

    return effort, influence, dominion_state
