"""
Service Layer Exceptions

Errors raised at the chat store boundary. Both leave the stored chat unchanged.
"""


class ChatNotFoundError(LookupError):
    """Raised when the requested chat ID does not exist."""

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__(f"Chat {chat_id} not found")


class UnauthorizedError(PermissionError):
    """Raised when a chat is accessed by someone other than its owner."""

    def __init__(self, chat_id: str, owner_id: str):
        self.chat_id = chat_id
        self.owner_id = owner_id
        super().__init__(f"User {owner_id} does not own chat {chat_id}")
