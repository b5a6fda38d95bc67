"""
Pydantic models for chat messages.

``from`` is a Python keyword, so the sender is stored in the ``frm``
attribute and aliased to ``from`` on the wire.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictStr


BROADCAST = "Todos"


class MessageType(str, Enum):
    MESSAGE = "message"
    PRIVATE_MESSAGE = "private_message"
    STATUS = "status"


class MessageCreate(BaseModel):
    """Schema for posting a message.

    Only user messages can be posted; ``status`` messages are generated
    by the room itself when participants join or leave.
    """

    to: StrictStr = Field(..., min_length=1, example=BROADCAST)
    text: StrictStr = Field(..., min_length=1, example="hello")
    type: Literal["message", "private_message"] = Field(..., example="message")

    model_config = {
        "str_strip_whitespace": True,
    }


class MessageRead(BaseModel):
    """Schema for reading a message from the API."""

    id: Optional[int] = Field(None, exclude=True)
    frm: str = Field(..., alias="from")
    to: str
    text: str
    type: MessageType
    time: str = Field(..., example="14:02:37")

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
    }
