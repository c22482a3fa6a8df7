import asyncio
import contextlib
from typing import TYPE_CHECKING

import httpx
import structlog

from stampverify.config import Config
from stampverify.core.core import Service
from stampverify.core.modules.session.models import AuthOutcome, AuthStatus, Session, SessionToken, SignInOutcome, SignInStatus
from stampverify.core.modules.session.store import SessionStore
from stampverify.errors import UpstreamError
from stampverify.utils import random_hex

if TYPE_CHECKING:
    from stampverify.core.core import Core

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Challenge-response sign-in: session creation, nonce issuance, signature check."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._store: SessionStore | None = None
        self._sweeper: asyncio.Task[None] | None = None

    def set_core(self, core: "Core") -> None:
        super().set_core(core)
        self._store = SessionStore(
            ttl=self.config.session_ttl,
            clock=core.clock,
            use_timers=self.config.session_expiry_mode == "timer",
        )

    @property
    def store(self) -> SessionStore:
        if self._store is None:
            raise RuntimeError("Core not set for service")
        return self._store

    async def on_start(self) -> None:
        """Start the periodic sweep when timers are disabled."""
        if self.config.session_expiry_mode == "sweep":
            self._sweeper = asyncio.create_task(self._sweep_forever())

    async def on_stop(self) -> None:
        if self._sweeper is not None:
            self._sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweeper
            self._sweeper = None
        self.store.close()

    def create_session(self) -> SessionToken:
        token = self.store.create()
        logger.debug("session_created", token=token)
        return token

    def get_session(self, token: str) -> Session | None:
        return self.store.get(token)

    def require_session(self, token: str) -> Session:
        """Get a live session. Raises SessionNotFoundError if unknown or expired."""
        return self.store.require(token)

    def start_sign_in(self, token: str, address: str) -> SignInOutcome:
        """Bind `address` to the session and issue the nonce to be signed.

        Only the first call per session has an effect; later calls report
        ALREADY_STARTED and leave the nonce and address untouched.
        """
        session = self.store.get(token)
        if session is None:
            return SignInOutcome(status=SignInStatus.NOT_FOUND)
        if session.nonce is not None:
            return SignInOutcome(status=SignInStatus.ALREADY_STARTED)

        session.nonce = random_hex("signin")
        session.address = address
        logger.debug("sign_in_started", token=token, address=address)
        return SignInOutcome(status=SignInStatus.STARTED, nonce=session.nonce)

    async def authenticate(self, token: str, signature: str) -> AuthOutcome:
        """Check that `signature` over the session nonce was made by the bound address.

        Failures of the recovery endpoint reject the attempt instead of raising,
        and leave the session unsigned so the client can retry.
        """
        session = self.store.get(token)
        if session is None:
            return AuthOutcome(status=AuthStatus.NOT_FOUND)
        if session.address is None or session.nonce is None or session.signature is not None:
            return AuthOutcome(status=AuthStatus.NOT_READY)

        try:
            recovered = await self.core.services.idena.signature_address(session.nonce, signature)
        except (httpx.HTTPError, UpstreamError, ValueError) as e:
            logger.warning("signature_recovery_failed", token=token, error=str(e))
            return AuthOutcome(status=AuthStatus.REJECTED)

        if not recovered or recovered.lower() != session.address.lower():
            logger.info("signature_rejected", token=token, address=session.address, recovered=recovered)
            return AuthOutcome(status=AuthStatus.REJECTED)

        session.signature = signature
        logger.info("signature_accepted", token=token, address=session.address)
        return AuthOutcome(status=AuthStatus.AUTHENTICATED)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.config.session_sweep_interval)
            removed = self.store.sweep()
            if removed:
                logger.debug("sessions_swept", removed=removed)
