"""
FastAPI dependencies giving endpoints access to the services.

The services are built once in ``create_app`` around the shared
``Store`` and kept on ``app.state``; these helpers fetch them from the
current request.
"""

from typing import Optional

from fastapi import Header, Request

from chat_room_api.app.core.db import Store
from chat_room_api.app.services.message_service import MessageBoard
from chat_room_api.app.services.participant_service import ParticipantRegistry


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_registry(request: Request) -> ParticipantRegistry:
    return request.app.state.registry


def get_board(request: Request) -> MessageBoard:
    return request.app.state.board


def get_user_name(user: Optional[str] = Header(None)) -> str:
    """Return the ``user`` header stripped the way registration strips names.

    An absent or blank header yields an empty string.
    """
    return (user or "").strip()
