"""
Roll dispatch and check dialog flows for godsheet.

Checks run through a small state machine: Idle -> AwaitingSubmission when
the dialog is shown, then Submitted on confirm or back to Idle on dismiss.
The fast path goes straight from Idle to Submitted with default options.
"""

from collections.abc import Awaitable
from typing import Any, Protocol

import structlog

from godsheet.character.derivation import Character
from godsheet.character.models import Item
from godsheet.errors import DialogStateError
from godsheet.rolls.builder import RollBuilder
from godsheet.rolls.types import (
    AttackRollRequest,
    CheckState,
    DamageRollRequest,
    DialogConfig,
    RollRequest,
)
from godsheet.rules.tables import AttributeKey, SaveKey

logger = structlog.get_logger(__name__)


class DialogPresenter(Protocol):
    """Shows a check form and resolves to the submitted options, or None on dismiss."""

    def present(self, config: DialogConfig) -> Awaitable[dict[str, Any] | None]: ...


class RollEvaluator(Protocol):
    """Evaluates a roll request and takes care of displaying the result."""

    def dispatch(self, request: RollRequest) -> None: ...


class CheckFlow:
    """
    State of one check dialog.

    Transitions:
        open():   IDLE -> AWAITING_SUBMISSION
        submit(): AWAITING_SUBMISSION -> SUBMITTED
        cancel(): AWAITING_SUBMISSION -> IDLE
        skip():   IDLE -> SUBMITTED (fast path)
    """

    def __init__(self, config: DialogConfig | None = None) -> None:
        self.config = config
        self.state = CheckState.IDLE
        self.options: dict[str, Any] | None = None

    def _transition(self, expected: CheckState, new_state: CheckState) -> None:
        if self.state is not expected:
            raise DialogStateError(
                f"Cannot move check flow from {self.state.value} to {new_state.value}"
            )
        self.state = new_state

    def open(self) -> None:
        """Show the dialog."""
        self._transition(CheckState.IDLE, CheckState.AWAITING_SUBMISSION)

    def submit(self, options: dict[str, Any]) -> None:
        """Accept the submitted options."""
        self._transition(CheckState.AWAITING_SUBMISSION, CheckState.SUBMITTED)
        self.options = options

    def cancel(self) -> None:
        """Dismiss the dialog without rolling."""
        self._transition(CheckState.AWAITING_SUBMISSION, CheckState.IDLE)
        self.options = None

    def skip(self, options: dict[str, Any]) -> None:
        """Submit default options without showing the dialog."""
        self._transition(CheckState.IDLE, CheckState.SUBMITTED)
        self.options = options

    @property
    def is_submitted(self) -> bool:
        return self.state is CheckState.SUBMITTED


class RollService:
    """
    Builds roll requests for a character and hands them to the evaluator.

    Dispatch is fire-and-forget: the service does not wait on, inspect or
    retry the evaluation.
    """

    def __init__(
        self,
        character: Character,
        evaluator: RollEvaluator,
        presenter: DialogPresenter | None = None,
    ) -> None:
        self.character = character
        self.evaluator = evaluator
        self.presenter = presenter
        self.builder = RollBuilder(character)
        self.last_flow: CheckFlow | None = None

    def _dispatch(self, request: RollRequest) -> None:
        logger.info(
            "roll_dispatched",
            character=self.character.name,
            kind=request.kind.value,
            formula=request.formula,
            roll_mode=request.roll_mode.value,
        )
        self.evaluator.dispatch(request)

    async def _collect_options(self, config: DialogConfig) -> CheckFlow:
        flow = CheckFlow(config)
        self.last_flow = flow
        if self.presenter is None:
            raise DialogStateError("No dialog presenter configured for interactive checks")

        flow.open()
        response = await self.presenter.present(config)
        if response is None:
            flow.cancel()
            logger.info(
                "check_dialog_cancelled",
                character=self.character.name,
                kind=config.kind.value,
                label=config.label,
            )
        else:
            flow.submit(response)
        return flow

    def _fast_path(self, options: dict[str, Any]) -> CheckFlow:
        flow = CheckFlow()
        flow.skip(options)
        self.last_flow = flow
        return flow

    async def attribute_check(
        self, key: AttributeKey | str, shift_click: bool = False
    ) -> RollRequest | None:
        """
        Run an attribute check.

        Args:
            key: Attribute to check
            shift_click: Skip the dialog and use the default options

        Returns:
            The dispatched request, or None if the dialog was dismissed

        Raises:
            UnknownRollTarget: If key is not an attribute
            DialogStateError: If the dialog is needed but no presenter is set
        """
        if shift_click:
            flow = self._fast_path(self.builder.default_attribute_options().model_dump())
        else:
            flow = await self._collect_options(self.builder.describe_attribute_check(key))

        if not flow.is_submitted or flow.options is None:
            return None

        request = self.builder.build_attribute_check(key, flow.options)
        self._dispatch(request)
        return request

    async def save_check(
        self, key: SaveKey | str, shift_click: bool = False
    ) -> RollRequest | None:
        """
        Run a save check.

        Args:
            key: Save to roll
            shift_click: Skip the dialog and use the default options

        Returns:
            The dispatched request, or None if the dialog was dismissed

        Raises:
            UnknownRollTarget: If key is not a save
            DialogStateError: If the dialog is needed but no presenter is set
        """
        if shift_click:
            flow = self._fast_path(self.builder.default_save_options().model_dump())
        else:
            flow = await self._collect_options(self.builder.describe_save_check(key))

        if not flow.is_submitted or flow.options is None:
            return None

        request = self.builder.build_save_check(key, flow.options)
        self._dispatch(request)
        return request

    def attack(self, item: Item | str) -> AttackRollRequest:
        """Attack with a weapon or gift and dispatch the roll."""
        request = self.builder.build_attack(item)
        self._dispatch(request)
        return request

    def roll_fray_die(self) -> DamageRollRequest:
        """Roll the fray die and dispatch it."""
        request = self.builder.build_fray()
        self._dispatch(request)
        return request
