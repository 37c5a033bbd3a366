"""Edit-session state: keep only the newest result and the last good answer."""

from __future__ import annotations

import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Any

from common.logging import get_logger

from .pipeline import ComputationResult

ERROR_INDICATOR = "Error"
DEFAULT_MAX_SESSIONS = 256
DEFAULT_SESSION_TTL = timedelta(minutes=30)

logger = get_logger("physics_calc.sessions")


class LatestResultGate:
    """Apply a completed evaluation only if it belongs to the newest submission.

    Evaluations are never cancelled; a result whose ticket has been overtaken
    by a later submission is simply dropped when it completes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0
        self._applied = 0
        self._latex = ""
        self._answer: str | None = None
        self._error: str | None = None
        self.last_accessed = datetime.now(timezone.utc)

    def touch(self) -> None:
        self.last_accessed = datetime.now(timezone.utc)

    def submit(self, ticket: int | None = None) -> int:
        """Register a new edit and return its ticket.

        Callers that sequence their own edits (such as a browser numbering its
        requests) pass ``ticket``; otherwise the next number is issued.
        """

        with self._lock:
            if ticket is None:
                ticket = self._latest + 1
            if ticket < 1:
                raise ValueError("Tickets start at 1")
            self._latest = max(self._latest, ticket)
            return ticket

    def complete(self, ticket: int, result: ComputationResult) -> bool:
        """Apply ``result`` unless a newer edit was submitted. Returns ``True`` if applied."""

        with self._lock:
            if ticket != self._latest or ticket <= self._applied:
                return False
            self._applied = ticket
            self._latex = result.latex
            if result.ok:
                self._answer = result.rendered
                self._error = None
            else:
                self._error = result.error
            return True

    def display(self) -> str:
        with self._lock:
            if self._error is not None:
                return ERROR_INDICATOR
            return self._answer or ""

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "latest": self._latest,
                "applied_sequence": self._applied,
                "latex": self._latex,
                "answer": self._answer,
                "error": self._error,
                "display": ERROR_INDICATOR if self._error is not None else (self._answer or ""),
            }


class SessionStore:
    """Thread-safe in-memory registry of edit sessions with TTL purging."""

    def __init__(
        self,
        max_items: int = DEFAULT_MAX_SESSIONS,
        ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> None:
        self.max_items = max_items
        self.ttl = ttl
        self._items: "OrderedDict[str, LatestResultGate]" = OrderedDict()
        self._lock = threading.Lock()

    def configure(self, *, max_items: int | None = None, ttl: timedelta | None = None) -> None:
        with self._lock:
            if max_items is not None:
                self.max_items = max(int(max_items), 1)
            if ttl is not None:
                self.ttl = ttl
            self._purge_locked()

    def _purge_locked(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [
            session_id
            for session_id, gate in self._items.items()
            if now - gate.last_accessed > self.ttl
        ]
        for session_id in expired:
            self._items.pop(session_id, None)
        while len(self._items) > self.max_items:
            evicted, _ = self._items.popitem(last=False)
            logger.info("evicted edit session %s", evicted)

    def create(self) -> tuple[str, LatestResultGate]:
        session_id = uuid.uuid4().hex
        gate = LatestResultGate()
        with self._lock:
            self._items[session_id] = gate
            self._purge_locked()
        return session_id, gate

    def get(self, session_id: str) -> LatestResultGate:
        with self._lock:
            self._purge_locked()
            try:
                gate = self._items[session_id]
            except KeyError as exc:
                raise KeyError("Session expired or not found") from exc
            gate.touch()
            self._items.move_to_end(session_id)
            return gate

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._items.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


_SESSION_STORE = SessionStore()


def get_session_store() -> SessionStore:
    return _SESSION_STORE


__all__ = [
    "ERROR_INDICATOR",
    "LatestResultGate",
    "SessionStore",
    "get_session_store",
]
