"""
Pydantic models for participant data.

``ParticipantCreate`` is the registration payload; ``ParticipantRead``
is what ``GET /participants`` returns.  The liveness timestamp is
exposed on the wire as ``lastStatus`` (epoch milliseconds).
"""

from pydantic import BaseModel, Field, StrictStr


class ParticipantCreate(BaseModel):
    """Schema for joining the room."""

    name: StrictStr = Field(..., min_length=1, example="alice")

    model_config = {
        "str_strip_whitespace": True,
    }


class ParticipantRead(BaseModel):
    """Schema for reading a participant from the API."""

    name: str
    last_status: int = Field(..., alias="lastStatus")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
