"""
Background eviction of silent participants.

``PresenceSweeper`` calls ``ParticipantRegistry.sweep`` on a fixed
interval, independently of any request.  It is started by the
application's startup event and cancelled on shutdown.  A failing sweep
is logged and the loop carries on with the next tick.
"""

import asyncio
import logging
from typing import Optional

from ..core.errors import StoreError
from .participant_service import ParticipantRegistry


logger = logging.getLogger(__name__)


class PresenceSweeper:
    """Periodic task removing participants whose heartbeat has expired."""

    def __init__(
        self,
        registry: ParticipantRegistry,
        interval_seconds: float = 15.0,
        timeout_ms: int = 10000,
    ) -> None:
        self.registry = registry
        self.interval_seconds = interval_seconds
        self.timeout_ms = timeout_ms
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Run a single sweep and return the number of evicted participants."""
        evicted = await self.registry.sweep(self.timeout_ms)
        if evicted:
            logger.info("Presence sweep evicted %d participant(s)", evicted)
        return evicted

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except StoreError as exc:
                logger.error("Presence sweep failed: %s", exc)
            except Exception:
                logger.exception("Presence sweep crashed; retrying on the next tick")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(
            "Presence sweeper started (interval %.1fs, timeout %dms)",
            self.interval_seconds,
            self.timeout_ms,
        )

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Presence sweeper stopped")
