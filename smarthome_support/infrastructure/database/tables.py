"""
Database Table Definitions.

This module defines the SQL schema using SQLModel.
We use the 'DBModel' suffix to distinguish these persistence models
from the Pydantic state models (ChatSession).
"""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from ...state.models import utcnow


class ChatDBModel(SQLModel, table=True):
    """
    Persistence model for support chats.
    Maps 1-to-1 with the 'chats' table.
    """

    __tablename__ = "chats"

    chat_id: str = Field(primary_key=True, index=True)
    owner_id: str = Field(index=True)

    # Store the entire ChatSession (messages, step pointer, escalation) as one document.
    # JSONB on PostgreSQL, plain JSON elsewhere.
    state: Dict[str, Any] = Field(
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    )

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
