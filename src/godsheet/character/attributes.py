"""Attribute resolution for godsheet.

Maps each raw attribute score to its modifier, check target and display
labels using the injected rules table and localizer.
"""

import structlog

from godsheet.character.models import AttributeState, CharacterSheet
from godsheet.i18n import Localizer, localize
from godsheet.rules.tables import ATTRIBUTE_KEYS, AttributeKey, RulesTable

logger = structlog.get_logger(__name__)


class AttributeResolver:
    """Resolves raw attribute scores against the score-to-modifier curve."""

    def __init__(self, rules: RulesTable, localizer: Localizer | None = None) -> None:
        self.rules = rules
        self.localizer = localizer

    def get_modifier(self, value: int) -> int:
        """
        Get the modifier for a raw score.

        Scores outside the valid domain have no modifier and count as 0.

        Examples:
            >>> resolver.get_modifier(14)
            2
            >>> resolver.get_modifier(3)
            -4
        """
        if not self.rules.is_valid_score(value):
            return 0
        modifier = self.rules.modifier_for(value)
        return modifier if modifier is not None else 0

    def resolve(self, key: AttributeKey, value: int) -> AttributeState:
        """
        Resolve one attribute.

        A score outside the valid domain is corrupt input: it is reset to the
        default score with a modifier of 0 instead of failing the pass.

        Args:
            key: Attribute being resolved
            value: Raw stored score

        Returns:
            AttributeState with value, mod, check, label and abbr
        """
        if self.rules.is_valid_score(value):
            mod = self.get_modifier(value)
        else:
            logger.warning(
                "attribute_out_of_range",
                attribute=key.value,
                value=value,
                reset_to=self.rules.default_score,
            )
            value = self.rules.default_score
            mod = 0

        return AttributeState(
            value=value,
            mod=mod,
            check=self.rules.check_base - value,
            label=localize(self.localizer, f"attributes.{key.value}.label", key.value),
            abbr=localize(self.localizer, f"attributes.{key.value}.abbr", key.value),
        )

    def resolve_all(self, sheet: CharacterSheet) -> dict[AttributeKey, AttributeState]:
        """Resolve every attribute of a sheet."""
        return {key: self.resolve(key, sheet.attributes[key].value) for key in ATTRIBUTE_KEYS}
