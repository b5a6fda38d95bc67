"""
Participant endpoints for API v1.

Joining the room and listing who is currently in it.  There is no
authentication: a participant is identified only by the name chosen on
registration.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status

from chat_room_api.app.api.deps import get_registry
from chat_room_api.app.core.errors import Conflict, StoreError, ValidationError
from chat_room_api.app.schemas.participant import ParticipantRead
from chat_room_api.app.services.participant_service import ParticipantRegistry
from chat_room_api.app.services.validation import validate_participant


router = APIRouter()


@router.post("", response_model=ParticipantRead, status_code=status.HTTP_201_CREATED)
async def register_participant(
    body: Any = Body(None),
    registry: ParticipantRegistry = Depends(get_registry),
) -> ParticipantRead:
    """Enter the room under the given ``name``.

    Returns 422 with every violation if the payload is invalid and 409
    if the name is already taken.  A ``status`` message announcing the
    newcomer is posted to everybody.
    """
    try:
        data = validate_participant(body)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors)
    try:
        return await registry.register(data.name)
    except Conflict as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=List[ParticipantRead])
async def list_participants(registry: ParticipantRegistry = Depends(get_registry)) -> List[ParticipantRead]:
    """List the participants currently in the room."""
    try:
        return await registry.list()
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
