"""
Business logic for participants.

``ParticipantRegistry`` keeps track of who is in the room and when they
last signalled that they are still there.  Joining and leaving the room
each produce a ``status`` message through the ``MessageBoard``.

The participant row and its status message are two separate writes.
If the second one fails the participant is in the room without a join
notice; nothing reconciles that state.
"""

import logging
import time
from typing import Callable, List

from ..core.db import DuplicateKeyError, Store
from ..core.errors import Conflict, NotFound
from ..schemas.participant import ParticipantRead
from .message_service import MessageBoard


logger = logging.getLogger(__name__)


JOIN_TEXT = "entered the room"
LEAVE_TEXT = "left the room"


class ParticipantRegistry:
    """Registration, listing, heartbeats and eviction of participants."""

    def __init__(self, store: Store, board: MessageBoard, clock: Callable[[], float] = time.time) -> None:
        self.store = store
        self.board = board
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    async def register(self, name: str) -> ParticipantRead:
        """Add ``name`` to the room and announce it.

        Raises ``Conflict`` if a participant with exactly this name is
        already registered.
        """
        existing = await self.store.fetchone(
            "SELECT name FROM participants WHERE name = ?", (name,)
        )
        if existing:
            raise Conflict(f"{name} is already in the room")
        last_status = self._now_ms()
        try:
            await self.store.execute(
                "INSERT INTO participants (name, last_status) VALUES (?, ?)",
                (name, last_status),
            )
        except DuplicateKeyError as exc:
            # Registered concurrently between the lookup and the insert.
            raise Conflict(f"{name} is already in the room") from exc
        logger.info("Participant %s joined", name)
        await self.board.record_status(name, JOIN_TEXT)
        return ParticipantRead(name=name, last_status=last_status)

    async def list(self) -> List[ParticipantRead]:
        """Return every participant in insertion order."""
        rows = await self.store.fetchall(
            "SELECT name, last_status FROM participants ORDER BY rowid"
        )
        return [ParticipantRead(name=row["name"], last_status=row["last_status"]) for row in rows]

    async def heartbeat(self, name: str) -> None:
        """Refresh the liveness timestamp of ``name``.

        Raises ``NotFound`` if the participant is not registered, which
        the client should treat as an expired session.
        """
        cursor = await self.store.execute(
            "UPDATE participants SET last_status = ? WHERE name = ?",
            (self._now_ms(), name),
        )
        if cursor.rowcount == 0:
            raise NotFound(f"{name} is not in the room")

    async def sweep(self, timeout_ms: int) -> int:
        """Remove every participant silent for ``timeout_ms`` or longer.

        A ``status`` message is emitted for each removed participant.
        Returns the number of participants evicted.
        """
        cutoff = self._now_ms() - timeout_ms
        stale = await self.store.fetchall(
            "SELECT name FROM participants WHERE last_status <= ? ORDER BY rowid",
            (cutoff,),
        )
        evicted = 0
        for row in stale:
            # The timestamp condition keeps a participant whose heartbeat
            # landed after the read above; only rows actually deleted here
            # get a departure notice.
            cursor = await self.store.execute(
                "DELETE FROM participants WHERE name = ? AND last_status <= ?",
                (row["name"], cutoff),
            )
            if cursor.rowcount == 0:
                continue
            evicted += 1
            logger.info("Participant %s timed out", row["name"])
            await self.board.record_status(row["name"], LEAVE_TEXT)
        return evicted
