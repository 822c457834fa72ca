"""
Schemas - Structured Output Models for LLM Responses

Defines Pydantic models used for structured LLM outputs, ensuring
predictable and parseable results from the free-text triage.
"""

from smarthome_support.schemas.decisions import TriageDecision

__all__ = [
    "TriageDecision",
]
