"""
State Layer - Runtime Data Models

Defines the runtime chat state: messages, the active step pointer and the
escalation flag.
"""

from smarthome_support.state.models import (
    ChatSession,
    Message,
    Sender,
)

__all__ = [
    "ChatSession",
    "Message",
    "Sender",
]
