"""
Presence endpoint for API v1.

Clients call ``POST /status`` every few seconds to stay in the room.
A 404 means the participant is unknown (or was already swept) and has
to register again.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from chat_room_api.app.api.deps import get_registry, get_user_name
from chat_room_api.app.core.errors import NotFound, StoreError
from chat_room_api.app.services.participant_service import ParticipantRegistry


router = APIRouter()


@router.post("", status_code=status.HTTP_200_OK)
async def heartbeat(
    user: str = Depends(get_user_name),
    registry: ParticipantRegistry = Depends(get_registry),
) -> Response:
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='"user" header is required')
    try:
        await registry.heartbeat(user)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return Response(status_code=status.HTTP_200_OK)
