"""
Execution Layer - Dialogue State Machine and Chat Lifecycle

Defines the DialogueEngine (deterministic troubleshooting state machine) and
the SessionLifecycle that applies its turns to chat sessions.
"""

from smarthome_support.execution.engine import DialogueEngine, DialogueTurn, UnknownStepError
from smarthome_support.execution.lifecycle import SessionLifecycle


__all__ = [
    "DialogueEngine",
    "DialogueTurn",
    "SessionLifecycle",
    "UnknownStepError",
]
