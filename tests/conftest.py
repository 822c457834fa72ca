import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from smarthome_support.execution.engine import DialogueEngine
from smarthome_support.execution.lifecycle import SessionLifecycle
from smarthome_support.infrastructure.database.connection import init_db
from smarthome_support.repositories.chat import InMemoryChatRepository, SqlChatRepository
from smarthome_support.repositories.steps import StaticStepCatalog
from smarthome_support.services.chat import ChatService


@pytest.fixture
def catalog():
    return StaticStepCatalog()


@pytest.fixture
def engine(catalog):
    return DialogueEngine(catalog)


@pytest.fixture
def lifecycle(engine):
    return SessionLifecycle(engine)


@pytest.fixture
def sql_engine():
    """A private in-memory SQLite database per test."""
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def chat_repo(request):
    """Runs store tests against both chat store implementations."""
    if request.param == "memory":
        return InMemoryChatRepository()
    return SqlChatRepository(request.getfixturevalue("sql_engine"))


@pytest.fixture
def service(lifecycle):
    return ChatService(chat_repository=InMemoryChatRepository(), lifecycle=lifecycle)
