"""
Dependency Injection Wiring (Composition Root).

This module builds the application's singletons (catalog, engine, lifecycle,
chat store, triage, chat service) and wires them together. @lru_cache makes
each one exist once per process; tests swap them via
app.dependency_overrides.
"""


from functools import lru_cache
from fastapi import Depends

from ..config import settings
from ..llm.adapters.openai_adapter import OpenAIAdapter
from ..repositories.steps import StepCatalog, StaticStepCatalog
from ..repositories.chat import ChatRepository, InMemoryChatRepository, SqlChatRepository
from ..execution.engine import DialogueEngine
from ..execution.lifecycle import SessionLifecycle
from ..services.triage import FreeTextTriage, KeywordTriage, LLMTriage
from ..services.chat import ChatService

from ..infrastructure.database.connection import init_db

# Step Catalog (Singleton)
@lru_cache()
def get_step_catalog() -> StepCatalog:
    return StaticStepCatalog()

# Chat Store (Singleton)
# Note: In-memory storage must be a singleton so data persists across requests!
@lru_cache()
def get_chat_repository() -> ChatRepository:
    if settings.CHAT_STORE == "sql":
        init_db()
        return SqlChatRepository()
    return InMemoryChatRepository()

# The Engine (Singleton Service)
@lru_cache()
def get_dialogue_engine(
    catalog: StepCatalog = Depends(get_step_catalog)
) -> DialogueEngine:
    return DialogueEngine(catalog=catalog)

@lru_cache()
def get_session_lifecycle(
    engine: DialogueEngine = Depends(get_dialogue_engine)
) -> SessionLifecycle:
    return SessionLifecycle(engine)

# Free-text Triage (Singleton)
@lru_cache()
def get_triage(
    catalog: StepCatalog = Depends(get_step_catalog)
) -> FreeTextTriage:
    if settings.FREE_TEXT_TRIAGE == "llm":
        llm = OpenAIAdapter(
            api_key=settings.OPENAI_API_KEY,
            model_name=settings.OPENAI_MODEL
        )
        return LLMTriage(llm, catalog, temperature=settings.LLM_TEMPERATURE)
    return KeywordTriage()

# The Chat Service (Singleton Service)
@lru_cache()
def get_chat_service(
    chat_repo: ChatRepository = Depends(get_chat_repository),
    lifecycle: SessionLifecycle = Depends(get_session_lifecycle),
    triage: FreeTextTriage = Depends(get_triage)
) -> ChatService:
    """
    Injects all necessary components into the ChatService.
    """
    return ChatService(
        chat_repository=chat_repo,
        lifecycle=lifecycle,
        triage=triage
    )
