"""Advancement accounting for godsheet.

Totals what a character's words and projects commit, then resolves the level
their experience and spent dominion qualify for.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from godsheet.character.models import AdvancementTotals, Item, ItemKind
from godsheet.rules.tables import AdvancementRequirement, RulesTable

# Item kinds whose costs and word bonuses count towards advancement
ADVANCEMENT_KINDS = (ItemKind.WORD, ItemKind.PROJECT)


@dataclass(frozen=True)
class LevelResolution:
    """Resolved level and what the next one requires (None at the cap)."""

    level: int
    advancement: AdvancementRequirement | None


def total_advancement(items: Iterable[Item]) -> AdvancementTotals:
    """
    Sum the advancement contributions of owned words and projects.

    The result is a plain sum, so item order does not matter. Missing cost
    fields contribute nothing.

    Args:
        items: Owned items of any kind

    Returns:
        AdvancementTotals with dominion spent, influence used and word bonuses
    """
    dominion_spent = 0
    influence_used = 0
    bonus_effort = 0
    bonus_influence = 0

    for item in items:
        if item.kind not in ADVANCEMENT_KINDS:
            continue
        dominion_spent += item.cost.dominion
        influence_used += item.cost.influence
        bonus_effort += 1 if item.effort_of_the_word else 0
        bonus_influence += 1 if item.influence_of_the_word else 0

    return AdvancementTotals(
        dominion_spent=dominion_spent,
        influence_used=influence_used,
        bonus_effort=bonus_effort,
        bonus_influence=bonus_influence,
    )


def resolve_level(rules: RulesTable, xp: int, dominion_spent: int) -> LevelResolution:
    """
    Resolve the current level from experience and dominion spent.

    The level is the highest tier whose xp and dominion requirements are both
    met, or 1 if none are.

    Args:
        rules: Rules table holding the advancement tiers
        xp: Accumulated experience
        dominion_spent: Dominion committed to words and projects

    Returns:
        LevelResolution with the level and the next tier's requirements
    """
    level = 1
    for tier in rules.advancement:
        requirements = tier.requirements
        if (
            requirements.xp <= xp
            and requirements.dominion_spent <= dominion_spent
            and tier.level >= level
        ):
            level = tier.level

    if level >= rules.max_level:
        return LevelResolution(level=level, advancement=None)

    next_tier = rules.tier_for(level + 1)
    return LevelResolution(
        level=level,
        advancement=next_tier.requirements if next_tier is not None else None,
    )
