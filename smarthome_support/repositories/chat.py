import uuid
from abc import ABC, abstractmethod
from typing import Optional, Dict, List

from sqlmodel import Session, select

# State & Infra Imports
from ..state.models import ChatSession, utcnow
from ..services.exceptions import ChatNotFoundError, UnauthorizedError
from ..infrastructure.database.tables import ChatDBModel
from ..infrastructure.database import connection


class ChatRepository(ABC):
    """
    Defines how the application stores chats.
    Every read is scoped to the owning user; a chat is never handed to
    anyone but its owner.
    """

    @abstractmethod
    def create_chat(self, owner_id: str, title: Optional[str] = None) -> ChatSession:
        """Allocates a new, empty chat owned by owner_id."""
        pass

    @abstractmethod
    def load_chat(self, chat_id: str, owner_id: str) -> ChatSession:
        """
        Retrieves a chat by ID.
        Raises ChatNotFoundError or UnauthorizedError.
        """
        pass

    @abstractmethod
    def save_chat(self, session: ChatSession) -> ChatSession:
        """Persists the full chat. Last write wins."""
        pass

    @abstractmethod
    def list_chats(self, owner_id: str) -> List[ChatSession]:
        """The owner's chats, oldest first."""
        pass

    @abstractmethod
    def delete_chat(self, chat_id: str, owner_id: str) -> None:
        """Deletes a chat. Same errors as load_chat."""
        pass

    def _default_title(self, owner_id: str) -> str:
        return f"New Chat {len(self.list_chats(owner_id)) + 1}"


class InMemoryChatRepository(ChatRepository):
    """
    Uses in-memory dictionary for chat storage for testing/dev purposes.
    """

    def __init__(self):
        self._store: Dict[str, ChatSession] = {}

    def create_chat(self, owner_id: str, title: Optional[str] = None) -> ChatSession:
        new_id = str(uuid.uuid4())
        session = ChatSession(
            chat_id=new_id,
            owner_id=owner_id,
            title=title or self._default_title(owner_id),
        )
        self._store[new_id] = session
        return session

    def load_chat(self, chat_id: str, owner_id: str) -> ChatSession:
        session = self._store.get(chat_id)
        if session is None:
            raise ChatNotFoundError(chat_id)
        if session.owner_id != owner_id:
            raise UnauthorizedError(chat_id, owner_id)
        return session.model_copy(deep=True)

    def save_chat(self, session: ChatSession) -> ChatSession:
        if session.chat_id not in self._store:
            raise ChatNotFoundError(session.chat_id)
        self._store[session.chat_id] = session.model_copy(deep=True)
        return session

    def list_chats(self, owner_id: str) -> List[ChatSession]:
        return [
            session.model_copy(deep=True)
            for session in self._store.values()
            if session.owner_id == owner_id
        ]

    def delete_chat(self, chat_id: str, owner_id: str) -> None:
        self.load_chat(chat_id, owner_id)
        del self._store[chat_id]


class SqlChatRepository(ChatRepository):
    """
    SQL storage for chats (one JSON document per chat).
    """

    def __init__(self, engine=None):
        self.engine = engine or connection.engine

    def create_chat(self, owner_id: str, title: Optional[str] = None) -> ChatSession:
        # Create the (State) Python object
        new_id = str(uuid.uuid4())
        session = ChatSession(
            chat_id=new_id,
            owner_id=owner_id,
            title=title or self._default_title(owner_id),
        )

        # Save to DB
        db_model = ChatDBModel(
            chat_id=new_id,
            owner_id=owner_id,
            state=session.model_dump(mode="json"),
            created_at=session.created_at,
            updated_at=session.updated_at,
        )

        with Session(self.engine) as db:
            db.add(db_model)
            db.commit()

        return session

    def load_chat(self, chat_id: str, owner_id: str) -> ChatSession:
        with Session(self.engine) as db:
            result = self._get_owned(db, chat_id, owner_id)
            return self._to_state(result)

    def save_chat(self, session: ChatSession) -> ChatSession:
        with Session(self.engine) as db:
            result = db.get(ChatDBModel, session.chat_id)
            if not result:
                raise ChatNotFoundError(session.chat_id)

            # Update the JSON blob and the timestamp
            result.state = session.model_dump(mode="json")
            result.updated_at = utcnow()
            db.add(result)
            db.commit()

        return session

    def list_chats(self, owner_id: str) -> List[ChatSession]:
        with Session(self.engine) as db:
            statement = (
                select(ChatDBModel)
                .where(ChatDBModel.owner_id == owner_id)
                .order_by(ChatDBModel.created_at)
            )
            return [self._to_state(row) for row in db.exec(statement).all()]

    def delete_chat(self, chat_id: str, owner_id: str) -> None:
        with Session(self.engine) as db:
            result = self._get_owned(db, chat_id, owner_id)
            db.delete(result)
            db.commit()

    def _get_owned(self, db: Session, chat_id: str, owner_id: str) -> ChatDBModel:
        result = db.get(ChatDBModel, chat_id)
        if not result:
            raise ChatNotFoundError(chat_id)
        if result.owner_id != owner_id:
            raise UnauthorizedError(chat_id, owner_id)
        return result

    def _to_state(self, row: ChatDBModel) -> ChatSession:
        # Deserialize the JSON document back into the Pydantic state model
        session = ChatSession(**row.state)

        # Inject the timestamp from the SQL column
        session.updated_at = row.updated_at
        return session
