"""
State Layer - Runtime Data Models

This module defines the runtime state of a support chat: the append-only
message log, the pointer into the troubleshooting tree and the one-way
escalation flag. A ChatSession is the unit the chat store persists.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..domain.models import Option

Sender = Literal["user", "agent", "human"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """
    A single entry of the chat log. Never mutated after creation.
    Options are present only on agent messages that prompt a choice.
    """
    id: int
    text: str
    sender: Sender
    options: Optional[List[Option]] = None


class ChatSession(BaseModel):
    """
    The full conversation state for one user's support interaction.
    """
    chat_id: str
    owner_id: str
    title: str
    messages: List[Message] = Field(default_factory=list)
    is_escalated: bool = False

    # None means no active guided step (escalated, or not started yet)
    current_step_id: Optional[int] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def next_message_id(self) -> int:
        if not self.messages:
            return 0
        return self.messages[-1].id + 1

    @property
    def last_message(self) -> Optional[Message]:
        if not self.messages:
            return None
        return self.messages[-1]
