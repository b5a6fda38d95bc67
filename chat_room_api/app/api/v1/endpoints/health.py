"""Liveness endpoint reporting whether the store connection is usable."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from chat_room_api.app.api.deps import get_store
from chat_room_api.app.core.db import Store


router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health(store: Store = Depends(get_store)) -> Dict[str, Any]:
    return {"status": "ok", "store": "up" if store.available else "down"}
