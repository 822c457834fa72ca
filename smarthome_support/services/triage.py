"""
Free-Text Triage.

Optional pre-step for typed messages. A triage may pick the troubleshooting
step that fits the user's text; when it returns None the DialogueEngine's
keyword rules answer instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..execution.prompts import Template, render
from ..llm.interface import LLMProvider
from ..repositories.steps import StepCatalog
from ..schemas.decisions import TriageDecision

logger = logging.getLogger(__name__)


class FreeTextTriage(ABC):
    @abstractmethod
    async def route(self, text: str, current_step_id: Optional[int] = None) -> Optional[int]:
        """
        Returns the ID of the step to show for this text,
        or None to fall back to the keyword rules.
        """
        pass


class KeywordTriage(FreeTextTriage):
    """Defers every message to the engine's keyword rule table."""

    async def route(self, text: str, current_step_id: Optional[int] = None) -> Optional[int]:
        return None


class LLMTriage(FreeTextTriage):
    def __init__(self, llm_provider: LLMProvider, catalog: StepCatalog, temperature: float = 0.0):
        self.llm = llm_provider
        self.catalog = catalog
        self.temperature = temperature

    async def route(self, text: str, current_step_id: Optional[int] = None) -> Optional[int]:
        system_prompt = render(
            Template.FREE_TEXT_TRIAGE,
            steps=[self.catalog.get(step_id) for step_id in self.catalog.step_ids()],
            current_step=self.catalog.get(current_step_id) if current_step_id else None,
        )
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": text},
        ]

        try:
            decision = await self.llm.generate_structured_output(
                messages=messages,
                response_model=TriageDecision,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"Free-text triage failed: {e}")
            return None

        if decision.step_id is None:
            return None
        if self.catalog.get(decision.step_id) is None:
            logger.warning(f"Triage picked unknown step {decision.step_id}, ignoring")
            return None

        logger.info(f"Triage routed free text to step {decision.step_id}: {decision.reasoning}")
        return decision.step_id
