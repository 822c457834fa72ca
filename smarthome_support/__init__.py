"""
SmartHome Hub Support Chat

A support chat backend where a scripted agent walks the user through a fixed
troubleshooting decision tree and can hand the chat off to human support.
"""

from smarthome_support.domain import (
    ESCALATE,
    RESOLVE,
    FreeTextRule,
    Option,
    Outcome,
    Step,
)
from smarthome_support.state import (
    ChatSession,
    Message,
)
from smarthome_support.schemas.decisions import TriageDecision
from smarthome_support.execution import (
    DialogueEngine,
    DialogueTurn,
    SessionLifecycle,
    UnknownStepError,
)

__all__ = [
    # Domain Layer
    "ESCALATE",
    "RESOLVE",
    "FreeTextRule",
    "Option",
    "Outcome",
    "Step",
    # State Layer
    "ChatSession",
    "Message",
    # Schemas
    "TriageDecision",
    # Execution Layer
    "DialogueEngine",
    "DialogueTurn",
    "SessionLifecycle",
    "UnknownStepError",
]
