"""
Chat Service - Application Orchestration Layer

This service is the entry point for all chat operations. It loads a chat from
the store (enforcing ownership), applies one lifecycle transition and saves
the result. Mutations of the same chat are serialized so message IDs stay
strictly increasing even when two requests race on one chat.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..domain.models import Outcome
from ..state.models import ChatSession
from ..repositories.chat import ChatRepository
from ..execution.lifecycle import SessionLifecycle
from .triage import FreeTextTriage, KeywordTriage

logger = logging.getLogger(__name__)


class ChatLocks:
    """One asyncio.Lock per chat ID, created on first use."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def for_chat(self, chat_id: str) -> asyncio.Lock:
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        return lock

    def discard(self, chat_id: str):
        self._locks.pop(chat_id, None)


class ChatService:
    def __init__(
        self,
        chat_repository: ChatRepository,
        lifecycle: SessionLifecycle,
        triage: Optional[FreeTextTriage] = None,
        locks: Optional[ChatLocks] = None,
    ):
        self.chat_repo = chat_repository
        self.lifecycle = lifecycle
        self.triage = triage or KeywordTriage()
        self.locks = locks or ChatLocks()

    def start_chat(self, owner_id: str, title: Optional[str] = None) -> ChatSession:
        """Allocates a chat in the store and seeds it with the root step."""
        record = self.chat_repo.create_chat(owner_id, title)
        session = self.lifecycle.start_new(
            owner_id=owner_id, title=record.title, chat_id=record.chat_id
        )
        logger.info(f"Started chat {session.chat_id} for user {owner_id}")
        return self.chat_repo.save_chat(session)

    def get_chat(self, chat_id: str, owner_id: str) -> ChatSession:
        return self.chat_repo.load_chat(chat_id, owner_id)

    def list_chats(self, owner_id: str) -> List[ChatSession]:
        return self.chat_repo.list_chats(owner_id)

    def delete_chat(self, chat_id: str, owner_id: str):
        self.chat_repo.delete_chat(chat_id, owner_id)
        self.locks.discard(chat_id)
        logger.info(f"Deleted chat {chat_id}")

    async def send_message(self, chat_id: str, owner_id: str, text: str) -> ChatSession:
        async with self.locks.for_chat(chat_id):
            session = self.chat_repo.load_chat(chat_id, owner_id)
            if session.is_escalated:
                return self.lifecycle.send_user_message(session, text)

            routed_step_id = await self.triage.route(text, session.current_step_id)
            updated = self.lifecycle.send_user_message(session, text, routed_step_id)
            return self._save_if_changed(session, updated)

    async def select_option(self, chat_id: str, owner_id: str, outcome: Outcome) -> ChatSession:
        async with self.locks.for_chat(chat_id):
            session = self.chat_repo.load_chat(chat_id, owner_id)
            updated = self.lifecycle.select_option(session, outcome)
            return self._save_if_changed(session, updated)

    async def escalate(self, chat_id: str, owner_id: str) -> ChatSession:
        async with self.locks.for_chat(chat_id):
            session = self.chat_repo.load_chat(chat_id, owner_id)
            updated = self.lifecycle.escalate(session)
            return self._save_if_changed(session, updated)

    def _save_if_changed(self, before: ChatSession, after: ChatSession) -> ChatSession:
        # The lifecycle hands back the same object for no-op transitions
        if after is before:
            return before
        return self.chat_repo.save_chat(after)
