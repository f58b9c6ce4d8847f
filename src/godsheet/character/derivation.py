"""
Derivation pipeline for godsheet characters.

One pass recomputes every derived field from the stored inputs, in
dependency order: attributes, advancement, resources, vitals and armour
class, saves. The pass writes a fresh DerivedState and a corrected copy of
the sheet in a single replace step, so running it twice changes nothing.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

import structlog

from godsheet.character import equipment
from godsheet.character.advancement import resolve_level, total_advancement
from godsheet.character.attributes import AttributeResolver
from godsheet.character.models import CharacterSheet, DerivedState
from godsheet.character.resources import resolve_resources
from godsheet.character.saves import resolve_saves
from godsheet.character.vitals import armour_class, resolve_health
from godsheet.i18n import Localizer
from godsheet.rules.loader import get_default_rules
from godsheet.rules.tables import AttributeKey, RulesTable

logger = structlog.get_logger(__name__)

SourceT = TypeVar("SourceT")
DerivedT = TypeVar("DerivedT")


class Derivable(Generic[SourceT, DerivedT]):
    """
    Pairs a stored source value with the state derived from it.

    The derive function returns the (possibly corrected) source along with
    the derived value; refresh() replaces both at once.
    """

    def __init__(
        self,
        source: SourceT,
        derive: Callable[[SourceT], tuple[SourceT, DerivedT]],
    ) -> None:
        self.source = source
        self._derive = derive
        self.derived: DerivedT | None = None

    def refresh(self) -> DerivedT:
        """Run the derive function and replace source and derived state."""
        self.source, derived = self._derive(self.source)
        self.derived = derived
        return derived


class DerivationPipeline:
    """Runs the resolvers for one character sheet against one rules table."""

    def __init__(self, rules: RulesTable, localizer: Localizer | None = None) -> None:
        self.rules = rules
        self.localizer = localizer
        self.attributes = AttributeResolver(rules, localizer)

    def derive(self, sheet: CharacterSheet) -> DerivedState:
        """
        Compute the derived state of a sheet without touching it.

        Args:
            sheet: Stored inputs

        Returns:
            Fresh DerivedState
        """
        attributes = self.attributes.resolve_all(sheet)

        totals = total_advancement(sheet.items)
        resolution = resolve_level(self.rules, sheet.details.level.xp, totals.dominion_spent)
        level = resolution.level

        effort, influence, dominion = resolve_resources(
            self.rules, level, totals, sheet.items, sheet.resources.dominion
        )

        health = resolve_health(sheet.health.value, attributes[AttributeKey.CON], level)
        ac = armour_class(self.rules, sheet.items, attributes[AttributeKey.DEX], sheet.use_shield)

        saves = resolve_saves(self.rules, sheet, attributes, level, self.localizer)

        return DerivedState(
            attributes=attributes,
            saves=saves,
            level=level,
            advancement=resolution.advancement,
            totals=totals,
            effort=effort,
            influence=influence,
            dominion=dominion,
            health=health,
            ac=ac,
        )

    def run(self, sheet: CharacterSheet) -> tuple[CharacterSheet, DerivedState]:
        """
        Derive state and write the recovered values back onto a copy of the sheet.

        The copy carries reset attribute scores, the resolved level, the
        resource pools and the clamped health, matching the derived state.

        Returns:
            Tuple of (updated sheet, derived state)
        """
        derived = self.derive(sheet)
        updated = apply_derived(sheet, derived)

        logger.debug(
            "character_derived",
            character=sheet.name,
            level=derived.level,
            ac=derived.ac,
            health=derived.health.value,
            health_max=derived.health.max,
        )

        return updated, derived


def apply_derived(sheet: CharacterSheet, derived: DerivedState) -> CharacterSheet:
    """Return a copy of sheet whose stored values agree with derived."""
    updated = sheet.model_copy(deep=True)

    for key, state in derived.attributes.items():
        updated.attributes[key].value = state.value

    updated.details.level.value = derived.level
    updated.resources.effort.value = derived.effort.value
    updated.resources.effort.max = derived.effort.max
    updated.resources.influence.value = derived.influence.value
    updated.resources.influence.max = derived.influence.max
    updated.resources.dominion.spent = derived.dominion.spent
    updated.health.value = derived.health.value
    updated.health.max = derived.health.max

    return updated


class Character:
    """
    A character sheet together with its derived state.

    Composes a Derivable over the sheet with the derivation pipeline. The
    derived state is computed on construction and again on every call to
    prepare_derived_data(); equip operations change the sheet only.
    """

    def __init__(
        self,
        sheet: CharacterSheet,
        rules: RulesTable | None = None,
        localizer: Localizer | None = None,
    ) -> None:
        self.rules = rules if rules is not None else get_default_rules()
        self.localizer = localizer
        self.pipeline = DerivationPipeline(self.rules, localizer)
        self._entity: Derivable[CharacterSheet, DerivedState] = Derivable(
            sheet, self.pipeline.run
        )
        self.prepare_derived_data()

    @property
    def sheet(self) -> CharacterSheet:
        """Get the stored inputs."""
        return self._entity.source

    @property
    def derived(self) -> DerivedState:
        """Get the state computed by the latest derivation pass."""
        if self._entity.derived is None:
            return self.prepare_derived_data()
        return self._entity.derived

    @property
    def name(self) -> str:
        return self.sheet.name

    def prepare_derived_data(self) -> DerivedState:
        """Run a full derivation pass."""
        return self._entity.refresh()

    def wear_armour(self, item_id: str) -> None:
        """Wear one armour item and take off the rest (see equipment.wear_armour)."""
        equipment.wear_armour(self.sheet, item_id)

    def toggle_shield(self) -> bool:
        """Flip the shield toggle; armour class updates on the next pass."""
        return equipment.toggle_shield(self.sheet)

    def get_roll_data(self) -> dict[str, Any]:
        """
        Snapshot the data formulas can reference.

        Each attribute's full derived record is keyed by attribute key, so
        formulas can use ``@str.mod`` or ``@dex.value``; ``@lvl`` is the level.
        """
        derived = self.derived
        data: dict[str, Any] = {
            key.value: state.model_dump() for key, state in derived.attributes.items()
        }
        data["lvl"] = derived.level
        return data

    def __repr__(self) -> str:
        derived = self._entity.derived
        level = derived.level if derived is not None else "?"
        return f"<Character(name='{self.name}', level={level})>"
