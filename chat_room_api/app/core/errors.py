"""
Domain exceptions raised by the service layer.

Services raise these exceptions and the endpoints translate them into
``HTTPException`` responses.  Nothing here knows about HTTP.
"""

from typing import List


class ChatRoomError(Exception):
    """Base class for every error raised by the chat room services."""


class ValidationError(ChatRoomError):
    """Malformed or missing input.  Carries every violated constraint."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class Conflict(ChatRoomError):
    """A participant with the same name is already in the room."""


class Forbidden(ChatRoomError):
    """The sender of a message is not a registered participant."""


class NotFound(ChatRoomError):
    """The referenced participant is not registered (or was swept)."""


class StoreError(ChatRoomError):
    """The underlying database failed or is unavailable."""
