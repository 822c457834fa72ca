"""
Chat Session Lifecycle.

Applies DialogueEngine turns to ChatSession snapshots. Every operation works on
a deep copy and returns it, so the caller's session is never partially
updated: the engine is consulted first (it may raise), then the messages, the
step pointer and the escalation flag change together on the copy.
"""

import logging
import uuid
from typing import Optional

from ..domain.models import ESCALATE, Outcome
from ..state.models import ChatSession, Message, utcnow
from .engine import DialogueEngine, DialogueTurn

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New Chat"


class SessionLifecycle:
    def __init__(self, engine: DialogueEngine):
        self.engine = engine

    def start_new(
        self,
        owner_id: str,
        title: Optional[str] = None,
        chat_id: Optional[str] = None,
    ) -> ChatSession:
        """Creates a chat seeded with the root step as the first agent message."""
        session = ChatSession(
            chat_id=chat_id or str(uuid.uuid4()),
            owner_id=owner_id,
            title=title or DEFAULT_TITLE,
        )
        return self._apply_turn(session, self.engine.start())

    def send_user_message(
        self,
        session: ChatSession,
        text: str,
        routed_step_id: Optional[int] = None,
    ) -> ChatSession:
        """
        Appends the user's text and the agent's answer to it.

        routed_step_id lets a triage step pick the next step directly;
        otherwise the engine's keyword rules answer the text.
        """
        if session.is_escalated:
            logger.warning(f"Ignoring message for escalated chat {session.chat_id}")
            return session
        if not text.strip():
            return session

        if routed_step_id is not None:
            turn = self.engine.advance(session.current_step_id, routed_step_id)
        else:
            turn = self.engine.free_text(text)

        return self._apply_turn(session, turn, user_text=text)

    def select_option(self, session: ChatSession, outcome: Outcome) -> ChatSession:
        if session.is_escalated:
            logger.warning(f"Ignoring option {outcome!r} for escalated chat {session.chat_id}")
            return session

        turn = self.engine.advance(session.current_step_id, outcome)
        return self._apply_turn(session, turn)

    def escalate(self, session: ChatSession) -> ChatSession:
        """Hands the chat to human support. Escalating twice is a no-op."""
        if session.is_escalated:
            return session

        turn = self.engine.advance(session.current_step_id, ESCALATE)
        return self._apply_turn(session, turn)

    # ==========================================================================
    # State Mutation
    # ==========================================================================

    def _apply_turn(
        self,
        session: ChatSession,
        turn: DialogueTurn,
        user_text: Optional[str] = None,
    ) -> ChatSession:
        updated = session.model_copy(deep=True)

        if user_text is not None:
            updated.messages.append(
                Message(id=updated.next_message_id, text=user_text, sender="user")
            )

        updated.messages.append(
            Message(
                id=updated.next_message_id,
                text=turn.message,
                sender="human" if turn.escalate else "agent",
                options=list(turn.options) if turn.options else None,
            )
        )
        updated.current_step_id = turn.next_step_id
        if turn.escalate:
            updated.is_escalated = True
            logger.info(f"Chat {updated.chat_id} escalated to human support")
        updated.updated_at = utcnow()

        logger.debug(
            f"Chat {updated.chat_id}: {len(updated.messages)} messages, "
            f"step pointer {updated.current_step_id}"
        )
        return updated
