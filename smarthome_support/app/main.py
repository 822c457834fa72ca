import logging
from typing import List, Optional

from fastapi import FastAPI, Depends, Header, Request, status
from fastapi.responses import JSONResponse, Response

from ..config import settings
from ..execution.engine import UnknownStepError
from ..services.chat import ChatService
from ..services.exceptions import ChatNotFoundError, UnauthorizedError
from ..state.models import ChatSession
from .dependencies import get_chat_service
from .schemas import (
    ChatRead,
    ChatSummary,
    CreateChatRequest,
    MessageRead,
    OptionChoice,
    OptionRead,
    UserMessage,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="SmartHome Hub Support Chat")


def get_owner_id(x_user_id: str = Header(..., min_length=1)) -> str:
    """Identity of the caller, resolved upstream. No authentication happens here."""
    return x_user_id


# --- Error Mapping ---

@app.exception_handler(ChatNotFoundError)
async def chat_not_found_handler(request: Request, exc: ChatNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": "Not your chat"})


@app.exception_handler(UnknownStepError)
async def unknown_step_handler(request: Request, exc: UnknownStepError):
    logger.error(f"Dialogue defect on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def to_chat_read(session: ChatSession) -> ChatRead:
    # Explicit mapping from the state model to the public API shape.
    messages = [
        MessageRead(
            id=msg.id,
            text=msg.text,
            sender=msg.sender,
            options=(
                [OptionRead(text=opt.text, outcome=opt.outcome) for opt in msg.options]
                if msg.options else None
            ),
        )
        for msg in session.messages
    ]
    return ChatRead(
        chat_id=session.chat_id,
        title=session.title,
        is_escalated=session.is_escalated,
        updated_at=session.updated_at,
        current_step_id=session.current_step_id,
        messages=messages,
    )


# --- Endpoints ---

@app.post("/chats", response_model=ChatRead, status_code=status.HTTP_201_CREATED)
def create_chat(
    body: Optional[CreateChatRequest] = None,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    """Starts a new chat seeded with the troubleshooting menu."""
    return to_chat_read(service.start_chat(owner_id, body.title if body else None))


@app.get("/chats", response_model=List[ChatSummary])
def list_chats(
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    return [
        ChatSummary(
            chat_id=chat.chat_id,
            title=chat.title,
            is_escalated=chat.is_escalated,
            updated_at=chat.updated_at,
        )
        for chat in service.list_chats(owner_id)
    ]


@app.get("/chats/{chat_id}", response_model=ChatRead)
def get_chat(
    chat_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    return to_chat_read(service.get_chat(chat_id, owner_id))


@app.delete("/chats/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chat(
    chat_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    service.delete_chat(chat_id, owner_id)
    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/chats/{chat_id}/messages", response_model=ChatRead)
async def send_message(
    chat_id: str,
    message: UserMessage,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    session = await service.send_message(chat_id, owner_id, message.text)
    return to_chat_read(session)


@app.post("/chats/{chat_id}/options", response_model=ChatRead)
async def select_option(
    chat_id: str,
    choice: OptionChoice,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    session = await service.select_option(chat_id, owner_id, choice.outcome)
    return to_chat_read(session)


@app.post("/chats/{chat_id}/escalate", response_model=ChatRead)
async def escalate(
    chat_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ChatService = Depends(get_chat_service),
):
    session = await service.escalate(chat_id, owner_id)
    return to_chat_read(session)
