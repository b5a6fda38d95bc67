"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers of the chat room.  Each
domain router declares its endpoints on the empty path so that the
resources live at ``/participants``, ``/messages`` and ``/status``
without a trailing slash.
"""

from fastapi import APIRouter

from .endpoints import health, messages, participants, status

router = APIRouter()

router.include_router(participants.router, prefix="/participants", tags=["participants"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(status.router, prefix="/status", tags=["status"])
router.include_router(health.router, prefix="/health", tags=["health"])
