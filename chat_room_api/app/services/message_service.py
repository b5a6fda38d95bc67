"""
Service layer for chat messages.

``MessageBoard`` stores messages posted by participants, records the
``status`` notices emitted when somebody enters or leaves the room and
answers the question "which messages may this user see?".

Visibility is decided purely from ``type``, ``to`` and ``from``.  A
message is visible to ``user`` when any of the following holds:

* it is a public message (``type == 'message'``);
* it is addressed to everybody (``to == 'Todos'``), which covers the
  join/leave notices;
* it is a private message addressed to ``user``;
* it is a private message sent by ``user``.

Ordering uses the autoincrement ``id`` of each row, most recent first.
"""

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from ..core.db import Store
from ..core.errors import Forbidden
from ..schemas.message import BROADCAST, MessageRead, MessageType


logger = logging.getLogger(__name__)


VISIBLE_TO_USER = """
    type = 'message'
    OR to_user = ?
    OR (type = 'private_message' AND to_user = ?)
    OR (type = 'private_message' AND from_user = ?)
"""


def _row_to_message(row: dict) -> MessageRead:
    return MessageRead(
        id=row["id"],
        frm=row["from_user"],
        to=row["to_user"],
        text=row["text"],
        type=row["type"],
        time=row["time"],
    )


class MessageBoard:
    """Creation and filtered retrieval of messages."""

    def __init__(self, store: Store, clock: Callable[[], float] = time.time) -> None:
        self.store = store
        self.clock = clock

    def _now(self) -> str:
        return datetime.fromtimestamp(self.clock()).strftime("%H:%M:%S")

    async def _insert(self, frm: str, to: str, text: str, type_: str) -> MessageRead:
        stamp = self._now()
        cursor = await self.store.execute(
            "INSERT INTO messages (from_user, to_user, text, type, time) VALUES (?, ?, ?, ?, ?)",
            (frm, to, text, type_, stamp),
        )
        return MessageRead(id=cursor.lastrowid, frm=frm, to=to, text=text, type=type_, time=stamp)

    async def post(self, frm: str, to: str, text: str, type_: str) -> MessageRead:
        """Persist a message sent by a registered participant.

        Raises ``Forbidden`` (and stores nothing) if ``frm`` is not in
        the room.
        """
        sender = await self.store.fetchone(
            "SELECT name FROM participants WHERE name = ?", (frm,)
        )
        if not sender:
            logger.info("Rejected message from unregistered sender %s", frm)
            raise Forbidden(f"{frm} is not a participant")
        return await self._insert(frm, to, text, type_)

    async def record_status(self, name: str, text: str) -> MessageRead:
        """Emit a broadcast ``status`` message on behalf of ``name``."""
        return await self._insert(name, BROADCAST, text, MessageType.STATUS.value)

    async def list_for(self, user: str, limit: Optional[int] = None) -> List[MessageRead]:
        """Return the messages visible to ``user``, most recent first.

        If ``limit`` is given, at most that many messages are returned.
        """
        sql = (
            "SELECT id, from_user, to_user, text, type, time FROM messages"
            f" WHERE {VISIBLE_TO_USER} ORDER BY id DESC"
        )
        params: list = [BROADCAST, user, user]
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        rows = await self.store.fetchall(sql, params)
        return [_row_to_message(row) for row in rows]
