"""Chat room API client.

This module defines a small client wrapper around the chat room REST
API.  It uses the ``requests`` library internally and mirrors what the
browser front end does: join the room under a name, keep the session
alive by posting ``/status`` every few seconds, post messages and poll
the messages visible to the current user.

The client exposes high‑level methods:

* :meth:`join` – register a participant.
* :meth:`list_participants` – who is in the room.
* :meth:`send_message` – post a public or private message.
* :meth:`get_messages` – read the messages visible to the user.
* :meth:`keep_alive` – send one heartbeat.
* :meth:`run_heartbeat` – send heartbeats until told to stop.

Every method returns a tuple ``(data, error)`` where ``error`` is
``None`` on success or a dictionary with ``status_code`` and
``message`` describing the failure.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

BROADCAST = "Todos"


class ChatRoomAPI:
    """Client for interacting with the chat room API as one participant."""

    def __init__(
        self,
        *,
        base_url: str,
        name: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:5000``.
            name: Participant name sent in the ``user`` header.  Set by
                :meth:`join` when omitted.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for every request.
        """
        self.base_url = base_url.rstrip("/")
        self.name = name
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.name:
            headers["user"] = self.name
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message: Any = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------
    def join(self, name: str) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Enter the room as ``name``.

        On success the name is remembered and sent with every later
        request.  A ``409`` error means the name is taken.
        """
        data, error = self._request("POST", "/participants", json_body={"name": name})
        if error:
            return None, error
        self.name = name
        return data, None

    def list_participants(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/participants")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def keep_alive(self) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Send a single heartbeat.

        A ``404`` error means the session expired and :meth:`join` must
        be called again.
        """
        _, error = self._request("POST", "/status")
        return error is None, error

    def run_heartbeat(self, stop: threading.Event, interval: float = 5.0) -> Optional[Dict[str, Any]]:
        """Send heartbeats every ``interval`` seconds until ``stop`` is set.

        Returns the error that ended the loop early (for example an
        expired session), or ``None`` if ``stop`` was set.
        """
        while not stop.is_set():
            ok, error = self.keep_alive()
            if not ok:
                logger.warning("Heartbeat for %s failed: %s", self.name, error)
                return error
            stop.wait(interval)
        return None

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def send_message(
        self, text: str, to: str = BROADCAST, private: bool = False
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Post ``text`` to ``to``; ``private`` makes it a private message."""
        payload = {
            "to": to,
            "text": text,
            "type": "private_message" if private else "message",
        }
        return self._request("POST", "/messages", json_body=payload)

    def get_messages(self, limit: Optional[int] = None) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Return the messages visible to this participant, most recent first."""
        params = {"limit": limit} if limit is not None else None
        data, error = self._request("GET", "/messages", params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None
