"""
Main entrypoint for the Chat Room API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router.  The ``create_app`` function builds
the services around one shared ``Store`` and owns its lifecycle: the
store is opened and the presence sweeper started on startup, and both
are shut down with the application.  Run it with uvicorn, e.g.::

    uvicorn chat_room_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Store
from .core.errors import StoreError
from .core.logging_config import setup_logging
from .services.message_service import MessageBoard
from .services.participant_service import ParticipantRegistry
from .services.presence_service import PresenceSweeper


logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[Store]
        An unopened (or already opened) store to use instead of one
        built from ``config.database_url``.  Tests pass a temporary
        database here.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version, debug=config.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(v1_router, prefix=config.api_prefix)

    store = store or Store(config.database_url)
    board = MessageBoard(store)
    registry = ParticipantRegistry(store, board)
    sweeper = PresenceSweeper(
        registry,
        interval_seconds=config.sweep_interval_seconds,
        timeout_ms=config.status_timeout_ms,
    )
    app.state.store = store
    app.state.board = board
    app.state.registry = registry
    app.state.sweeper = sweeper

    @app.on_event("startup")
    async def startup_event() -> None:
        try:
            await store.open()
        except StoreError:
            # Store-dependent endpoints answer 500 until the service is restarted.
            logger.exception("Could not connect to the store")
            return
        if config.sweeper_enabled:
            sweeper.start()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await sweeper.stop()
        await store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
