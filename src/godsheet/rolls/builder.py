"""Roll request construction for godsheet.

Builds attribute check, save check, attack and fray-die requests from a
character's already-derived state. The check builders come in pairs: a
``describe_*`` method producing the dialog configuration and a ``build_*``
method turning the submitted options into a request.
"""

from typing import Any

import structlog

from godsheet.character.derivation import Character
from godsheet.character.models import Item
from godsheet.errors import ItemNotFound, UnknownRollTarget
from godsheet.i18n import Localizer, format_string, localize
from godsheet.rolls.formulas import append_number, append_term
from godsheet.rolls.types import (
    D20_FORMULAS,
    AttackRollRequest,
    AttributeCheckOptions,
    DamageRollRequest,
    DialogConfig,
    RollKind,
    RollMode,
    RollRequest,
    RollType,
    SaveCheckOptions,
    default_roll_mode,
)
from godsheet.rules.tables import AttributeKey, SaveKey

logger = structlog.get_logger(__name__)


def _attribute_key(key: AttributeKey | str) -> AttributeKey:
    try:
        return AttributeKey(key)
    except ValueError as e:
        raise UnknownRollTarget(f"Unknown attribute '{key}'") from e


def _save_key(key: SaveKey | str) -> SaveKey:
    try:
        return SaveKey(key)
    except ValueError as e:
        raise UnknownRollTarget(f"Unknown save '{key}'") from e


class RollBuilder:
    """Builds roll requests for one character."""

    def __init__(self, character: Character) -> None:
        self.character = character

    @property
    def localizer(self) -> Localizer | None:
        return self.character.localizer

    def _roll_modes(self) -> dict[str, str]:
        return {
            mode.value: localize(self.localizer, f"rolls.roll_modes.{mode.value}", mode.value)
            for mode in RollMode
        }

    def _log_built(self, request: RollRequest) -> None:
        logger.debug(
            "roll_request_built",
            character=self.character.name,
            kind=request.kind.value,
            formula=request.formula,
            target=request.target,
        )

    # ------------------------------------------------------------------
    # Attribute checks
    # ------------------------------------------------------------------

    def describe_attribute_check(self, key: AttributeKey | str) -> DialogConfig:
        """
        Describe the dialog for an attribute check.

        Raises:
            UnknownRollTarget: If key is not an attribute
        """
        attribute = self.character.derived.attributes[_attribute_key(key)]
        rules = self.character.rules
        title = format_string(
            self.localizer,
            "rolls.attribute_prompt_title",
            "{attribute} Check",
            attribute=attribute.label,
        )
        return DialogConfig(
            kind=RollKind.ATTRIBUTE_CHECK,
            title=f"{title}: {self.character.name}",
            label=attribute.label,
            choices={name: name for name in rules.difficulties},
            default_choice=rules.default_difficulty,
            roll_modes=self._roll_modes(),
            default_roll_mode=default_roll_mode(),
            target=attribute.check,
            button_label=localize(self.localizer, "rolls.roll", "Roll"),
        )

    def default_attribute_options(self) -> AttributeCheckOptions:
        """Options submitted by the fast path."""
        return AttributeCheckOptions(
            relevant_fact=False,
            other_modifiers="",
            difficulty=self.character.rules.default_difficulty,
        )

    def build_attribute_check(
        self,
        key: AttributeKey | str,
        options: AttributeCheckOptions | dict[str, Any] | None = None,
    ) -> RollRequest:
        """
        Build an attribute check.

        Roll 1d20 (2d20 keep highest with a relevant fact) plus any other
        modifiers; the target is the attribute's check plus the difficulty's
        adjustment.

        Args:
            key: Attribute to check
            options: Submitted options, as a model or raw form data

        Returns:
            RollRequest for the check

        Raises:
            UnknownRollTarget: If key is not an attribute
        """
        attribute_key = _attribute_key(key)
        if options is None:
            options = self.default_attribute_options()
        elif isinstance(options, dict):
            options = AttributeCheckOptions.model_validate(options)

        attribute = self.character.derived.attributes[attribute_key]
        roll_type = RollType.ADVANTAGE if options.relevant_fact else RollType.NORMAL
        formula = append_term(D20_FORMULAS[roll_type], options.other_modifiers)
        target = attribute.check + self.character.rules.difficulty_adjustment(options.difficulty)

        data = self.character.get_roll_data()
        data["target"] = target

        request = RollRequest(
            kind=RollKind.ATTRIBUTE_CHECK,
            formula=formula,
            data=data,
            target=target,
            label=attribute.label,
            flavor=f"{attribute.label} ({options.difficulty})",
            speaker=self.character.name,
            roll_mode=options.roll_mode,
            options=options.model_dump(),
        )
        self._log_built(request)
        return request

    # ------------------------------------------------------------------
    # Save checks
    # ------------------------------------------------------------------

    def describe_save_check(self, key: SaveKey | str) -> DialogConfig:
        """
        Describe the dialog for a save check.

        Raises:
            UnknownRollTarget: If key is not a save
        """
        save = self.character.derived.saves[_save_key(key)]
        title = format_string(
            self.localizer,
            "rolls.save_prompt_title",
            "{save} Save ({target}+)",
            save=save.label,
            target=save.value,
        )
        return DialogConfig(
            kind=RollKind.SAVE_CHECK,
            title=f"{title}: {self.character.name}",
            label=save.label,
            choices={
                roll_type.value: localize(
                    self.localizer, f"rolls.roll_types.{roll_type.value}", roll_type.value
                )
                for roll_type in RollType
            },
            default_choice=RollType.NORMAL.value,
            roll_modes=self._roll_modes(),
            default_roll_mode=default_roll_mode(),
            target=save.value,
            button_label=localize(self.localizer, "rolls.roll", "Roll"),
        )

    @staticmethod
    def default_save_options() -> SaveCheckOptions:
        """Options submitted by the fast path."""
        return SaveCheckOptions(
            roll_type=RollType.NORMAL, other_modifiers=0, roll_mode=RollMode.PUBLIC
        )

    def build_save_check(
        self,
        key: SaveKey | str,
        options: SaveCheckOptions | dict[str, Any] | None = None,
    ) -> RollRequest:
        """
        Build a save check.

        Roll 1d20 (or 2d20 keep highest/lowest) plus other modifiers, minus
        the save's penalty; the target is the save's value.

        Raises:
            UnknownRollTarget: If key is not a save
        """
        save_key = _save_key(key)
        if options is None:
            options = self.default_save_options()
        elif isinstance(options, dict):
            options = SaveCheckOptions.model_validate(options)

        save = self.character.derived.saves[save_key]
        formula = append_number(D20_FORMULAS[options.roll_type], options.other_modifiers)
        formula = append_number(formula, -save.penalty)

        data = self.character.get_roll_data()
        data["target"] = save.value
        data["penalty"] = save.penalty

        request = RollRequest(
            kind=RollKind.SAVE_CHECK,
            formula=formula,
            data=data,
            target=save.value,
            label=save.label,
            flavor=f"{save.label} ({options.roll_type.value})",
            speaker=self.character.name,
            roll_mode=options.roll_mode,
            options=options.model_dump(),
        )
        self._log_built(request)
        return request

    # ------------------------------------------------------------------
    # Attacks and damage
    # ------------------------------------------------------------------

    def _attack_item(self, item: Item | str) -> Item:
        if isinstance(item, str):
            owned = self.character.sheet.get_item(item)
            if owned is None:
                raise ItemNotFound(item)
            item = owned
        if not item.is_attack_item:
            raise UnknownRollTarget(f"Item '{item.id}' ({item.kind.value}) cannot attack")
        return item

    def build_attack(self, item: Item | str) -> AttackRollRequest:
        """
        Build an attack with a weapon or gift.

        The attack adds level and the item's attribute modifier (plus the
        item's hit bonus, if any) to 1d20. Damage is the item's die plus the
        attribute modifier (plus its damage bonus, if any), unless the item
        supplies a custom formula.

        Args:
            item: Owned item or its id

        Raises:
            ItemNotFound: If an id names no owned item
            UnknownRollTarget: If the item is not a weapon or gift
        """
        item = self._attack_item(item)
        attribute = item.attribute.value

        attack_bonus = f"@lvl + @{attribute}.mod"
        if item.hit_bonus:
            attack_bonus += " + @extraBonus.hit"
        damage_bonus = f"@{attribute}.mod"
        if item.damage_bonus:
            damage_bonus += " + @extraBonus.dmg"

        custom = item.is_custom_type
        damage_formula = item.custom_formula if custom else f"{item.damage_die} + {damage_bonus}"

        data = self.character.get_roll_data()
        data["extraBonus"] = {"hit": item.hit_bonus, "dmg": item.damage_bonus}

        flavor = format_string(
            self.localizer,
            "rolls.attack_flavor",
            "{actor} attacks with {item}",
            actor=self.character.name,
            item=item.name,
        )

        request = AttackRollRequest(
            kind=RollKind.ATTACK,
            formula=f"1d20 + {attack_bonus}",
            data=data,
            label=item.name,
            flavor=flavor,
            speaker=self.character.name,
            attack_bonus=attack_bonus,
            damage_bonus=damage_bonus,
            damage_die=item.damage_die,
            damage_formula=damage_formula,
            straight_damage=item.straight_damage,
            damage_type=item.damage_type,
            custom=custom,
            custom_formula=item.custom_formula,
        )
        self._log_built(request)
        return request

    def build_fray(self) -> DamageRollRequest:
        """Build a fray die damage roll; no attack roll precedes it."""
        fray_die = int(self.character.sheet.details.fray_die)
        request = DamageRollRequest(
            kind=RollKind.DAMAGE,
            formula=f"d{fray_die}",
            data=self.character.get_roll_data(),
            label=f"d{fray_die}",
            flavor=format_string(
                self.localizer,
                "rolls.fray_flavor",
                "{actor} rolls their fray die",
                actor=self.character.name,
            ),
            speaker=self.character.name,
            straight_damage=False,
        )
        self._log_built(request)
        return request
