from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from config import settings
from services.wizard import WizardController


class SessionNotFound(KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id


class WizardSessionStore:
    """
    In-memory wizard sessions; nothing survives a restart.
    A session expires `ttl_seconds` after its last access, and when the store is full
    the least recently used session is evicted to make room.
    """

    def __init__(
        self,
        *,
        ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.wizard_session_ttl_seconds
        self.max_sessions = max_sessions if max_sessions is not None else settings.wizard_session_max
        self._clock = clock
        self._sessions: dict[str, tuple[float, WizardController]] = {}

    def create(self, factory: Callable[[], WizardController]) -> tuple[str, WizardController]:
        self._prune()
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest = min(self._sessions.items(), key=lambda kv: kv[1][0])[0]
            self._sessions.pop(oldest, None)
        session_id = f"wiz-{uuid.uuid4().hex[:12]}"
        wizard = factory()
        self._sessions[session_id] = (self._clock(), wizard)
        return session_id, wizard

    def get(self, session_id: str) -> WizardController:
        item = self._sessions.get(session_id)
        if item is None:
            raise SessionNotFound(session_id)
        last_seen, wizard = item
        now = self._clock()
        if now - last_seen > self.ttl_seconds:
            self._sessions.pop(session_id, None)
            raise SessionNotFound(session_id)
        self._sessions[session_id] = (now, wizard)
        return wizard

    def discard(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFound(session_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def _prune(self) -> None:
        now = self._clock()
        expired = [sid for sid, (ts, _) in self._sessions.items() if now - ts > self.ttl_seconds]
        for sid in expired:
            self._sessions.pop(sid, None)


wizard_sessions = WizardSessionStore()
