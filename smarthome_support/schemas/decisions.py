"""
Schemas - Structured Output Models for LLM Responses

This module defines the Pydantic model the LLM must fill when triaging a
free-text message. The schema keeps the answer machine-readable: either a
step ID from the catalog or nothing.
"""
from typing import Optional
from pydantic import BaseModel, Field

class TriageDecision(BaseModel):
    """
    The strict JSON structure the LLM must generate when routing free text.
    """
    step_id: Optional[int] = Field(
        None,
        description="ID of the troubleshooting step that best matches the user's problem, or null if none fits."
    )
    reasoning: str = Field(
        ...,
        description="Brief internal justification for the chosen step."
    )
