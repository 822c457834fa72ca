"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class CreateChatRequest(BaseModel):
    title: Optional[str] = None


class UserMessage(BaseModel):
    text: str = Field(..., min_length=1)


class OptionChoice(BaseModel):
    outcome: Union[int, Literal["resolve", "escalate"]]


class OptionRead(BaseModel):
    text: str
    outcome: Union[int, str]


class MessageRead(BaseModel):
    id: int
    text: str
    sender: Literal["user", "agent", "human"]
    options: Optional[List[OptionRead]] = None


class ChatSummary(BaseModel):
    chat_id: str
    title: str
    is_escalated: bool
    updated_at: datetime


class ChatRead(ChatSummary):
    current_step_id: Optional[int] = None
    messages: List[MessageRead]
