"""
Engine - Dialogue State Machine

The DialogueEngine is the deterministic state machine behind the scripted
support agent. It never touches a chat directly: every entry point returns a
DialogueTurn describing the next agent message and where the step pointer
goes, and the SessionLifecycle applies it.
-----------------------------------------------

States are the Step IDs of the catalog plus None (escalated, guided flow over).
Transitions are:
1. The Option outcomes declared on each Step (numeric -> that Step).
2. RESOLVE, from anywhere, back to the root Step. No path history is kept.
3. ESCALATE, from anywhere, to None. This is the only true terminal.

Free text does not follow the graph. It is matched against an ordered rule
table and re-anchors the pointer to the matching rule's step (or the root).
"""

import logging
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..domain.models import ESCALATE, RESOLVE, FreeTextRule, Option, Outcome
from ..repositories.steps import StepCatalog
from ..data.troubleshooting_steps import (
    ESCALATION_MESSAGE,
    FALLBACK_MESSAGE,
    FREE_TEXT_RULES,
    RESOLVED_MESSAGE,
)

logger = logging.getLogger(__name__)


class UnknownStepError(LookupError):
    """
    Raised when an outcome names a step the catalog does not have.
    This is an engine/catalog mismatch and is never retried.
    """

    def __init__(self, step_id):
        self.step_id = step_id
        super().__init__(f"Step {step_id!r} is not in the catalog.")


class DialogueTurn(BaseModel):
    """
    The result of one engine transition.
    """
    model_config = ConfigDict(frozen=True)

    message: str
    options: Optional[Tuple[Option, ...]] = None
    next_step_id: Optional[int] = None
    escalate: bool = False


class DialogueEngine:
    def __init__(
        self,
        catalog: StepCatalog,
        free_text_rules: Sequence[FreeTextRule] = FREE_TEXT_RULES,
    ):
        self.catalog = catalog
        self.free_text_rules = list(free_text_rules)
        self._validate_rules()

    # ==========================================================================
    # Entry Points
    # ==========================================================================

    def start(self) -> DialogueTurn:
        """Seeds a brand-new chat with the root step."""
        return self._step_turn(self.catalog.root_step_id)

    def advance(self, current_step_id: Optional[int], outcome: Outcome) -> DialogueTurn:
        """
        Moves the dialogue along the chosen outcome.

        current_step_id is informational: RESOLVE and ESCALATE are universal,
        and a numeric outcome names its target directly.
        """
        logger.debug(f"Advancing from step {current_step_id} with outcome {outcome!r}")

        if outcome == RESOLVE:
            root = self.catalog.root
            return DialogueTurn(
                message=RESOLVED_MESSAGE,
                options=root.options,
                next_step_id=root.id,
            )

        if outcome == ESCALATE:
            return DialogueTurn(
                message=ESCALATION_MESSAGE,
                options=None,
                next_step_id=None,
                escalate=True,
            )

        # bool is an int subclass but never a step id
        if isinstance(outcome, int) and not isinstance(outcome, bool):
            return self._step_turn(outcome)

        raise UnknownStepError(outcome)

    def free_text(self, text: str) -> DialogueTurn:
        """
        Answers typed text with the first matching canned response,
        or a clarifying prompt with the root menu.
        """
        for rule in self.free_text_rules:
            if rule.matches(text):
                logger.debug(f"Free text matched rule anchored at step {rule.anchor_step_id}")
                return DialogueTurn(
                    message=rule.response,
                    options=rule.options,
                    next_step_id=rule.anchor_step_id,
                )

        root = self.catalog.root
        return DialogueTurn(
            message=FALLBACK_MESSAGE,
            options=root.options,
            next_step_id=root.id,
        )

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _step_turn(self, step_id: int) -> DialogueTurn:
        step = self.catalog.get(step_id)
        if step is None:
            logger.error(f"Outcome points at missing step {step_id}")
            raise UnknownStepError(step_id)
        return DialogueTurn(
            message=step.text,
            options=step.options,
            next_step_id=step.id,
        )

    def _validate_rules(self):
        """Fails fast if a free-text rule points outside the catalog."""
        for rule in self.free_text_rules:
            targets = [rule.anchor_step_id] + [
                opt.outcome for opt in rule.options if isinstance(opt.outcome, int)
            ]
            for target in targets:
                if self.catalog.get(target) is None:
                    raise ValueError(
                        f"Free-text rule {rule.keywords!r} points at missing step {target}."
                    )
