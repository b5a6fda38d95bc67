"""Entry point for the chat room backend.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as DATABASE_URL, LOG_LEVEL and the presence sweeper
timings is read from environment variables; see
``chat_room_api/app/core/config.py`` for the supported names.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from chat_room_api.app.core.config import settings
from chat_room_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port are read from the ``HOST`` and ``PORT`` environment
    variables.  Defaults are ``0.0.0.0`` and ``5000``.
    """
    # Logging is configured by create_app(); uvicorn must not replace it.
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_config=None)
    server = Server(config)
    try:
        await server.serve()
    except Exception:
        logging.exception("Chat room server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
