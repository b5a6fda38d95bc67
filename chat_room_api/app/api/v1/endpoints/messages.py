"""
Message endpoints for API v1.

The sender (or reader) is identified by the ``user`` header.  Posting
requires the sender to be in the room; reading returns only the
messages that user is allowed to see, most recent first.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from chat_room_api.app.api.deps import get_board, get_user_name
from chat_room_api.app.core.errors import Forbidden, StoreError, ValidationError
from chat_room_api.app.schemas.message import MessageRead
from chat_room_api.app.services.message_service import MessageBoard
from chat_room_api.app.services.validation import validate_limit, validate_message


router = APIRouter()

MISSING_USER = ['"user" header is required']


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def post_message(
    body: Any = Body(None),
    user: str = Depends(get_user_name),
    board: MessageBoard = Depends(get_board),
) -> MessageRead:
    """Post a public or private message as ``user``.

    Returns 422 if the header is missing, the payload is invalid or the
    sender is not a participant.
    """
    if not user:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=MISSING_USER)
    try:
        data = validate_message(body)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors)
    try:
        return await board.post(user, data.to, data.text, data.type)
    except Forbidden as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=List[MessageRead])
async def list_messages(
    limit: Optional[str] = Query(None),
    user: str = Depends(get_user_name),
    board: MessageBoard = Depends(get_board),
) -> List[MessageRead]:
    """Return the messages visible to ``user``, optionally the last ``limit`` only."""
    if not user:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=MISSING_USER)
    try:
        bound = validate_limit(limit)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors)
    try:
        return await board.list_for(user, bound)
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
