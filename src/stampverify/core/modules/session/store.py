"""In-process store for short-lived sign-in sessions."""

import asyncio

import structlog

from stampverify.core.clock import Clock
from stampverify.core.modules.session.models import Session, SessionToken
from stampverify.errors import SessionNotFoundError
from stampverify.utils import random_hex

logger = structlog.get_logger(__name__)


class SessionStore:
    """Owns every Session, keyed by token.

    Expiry is enforced on every read against the injected clock, so a session
    past its TTL is indistinguishable from an unknown token. Memory is reclaimed
    either by per-session timers (`use_timers=True`) or by calling `sweep()`.
    """

    def __init__(self, ttl: float, clock: Clock, use_timers: bool = True) -> None:
        self._ttl = ttl
        self._clock = clock
        self._use_timers = use_timers
        self._sessions: dict[SessionToken, Session] = {}
        self._timers: dict[SessionToken, asyncio.TimerHandle] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> SessionToken:
        token = SessionToken(random_hex("idena"))
        self._sessions[token] = Session(token=token, created_at=self._clock.now())
        if self._use_timers:
            self._schedule_expiry(token)
        return token

    def get(self, token: str) -> Session | None:
        session = self._sessions.get(SessionToken(token))
        if session is None:
            return None
        if self._is_expired(session):
            self.delete(token)
            return None
        return session

    def require(self, token: str) -> Session:
        session = self.get(token)
        if session is None:
            raise SessionNotFoundError
        return session

    def delete(self, token: str) -> None:
        """Remove a session. Safe to call for tokens already gone."""
        self._timers.pop(SessionToken(token), None)
        if self._sessions.pop(SessionToken(token), None) is not None:
            logger.debug("session_deleted", token=token)

    def sweep(self) -> int:
        """Evict every expired session, returning how many were removed."""
        expired = [token for token, session in self._sessions.items() if self._is_expired(session)]
        for token in expired:
            self.delete(token)
        return len(expired)

    def close(self) -> None:
        """Cancel pending expiry timers."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def _is_expired(self, session: Session) -> bool:
        return session.created_at + self._ttl <= self._clock.now()

    def _schedule_expiry(self, token: SessionToken) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop (sync caller): reads still enforce the TTL, sweep() reclaims memory
            return
        self._timers[token] = loop.call_later(self._ttl, self.delete, token)
