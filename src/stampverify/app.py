from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx

from stampverify.config import Config
from stampverify.core.clock import Clock
from stampverify.core.core import Core
from stampverify.core.modules.idena.models import IdentityAge, IdentityStake, IdentityState
from stampverify.core.modules.provider.models import VerifiedPayload
from stampverify.core.modules.session.models import AuthOutcome, AuthStatus, SessionToken, SignInOutcome, SignInStatus
from stampverify.errors import SessionNotFoundError


class App:
    """Facade for all application operations, delegating to Core services."""

    def __init__(self, config: Config, clock: Clock | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._core = Core(config, clock=clock, transport=transport)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Idena sign-in ===
    async def init_session(self) -> SessionToken:
        """Create a new sign-in session."""
        return self._core.services.session.create_session()

    async def start_sign_in(self, token: str, address: str) -> SignInOutcome:
        """Bind address and issue nonce. Raises SessionNotFoundError for unknown tokens."""
        outcome = self._core.services.session.start_sign_in(token, address)
        if outcome.status == SignInStatus.NOT_FOUND:
            raise SessionNotFoundError
        return outcome

    async def authenticate(self, token: str, signature: str) -> AuthOutcome:
        """Verify the nonce signature. Raises SessionNotFoundError for unknown tokens."""
        outcome = await self._core.services.session.authenticate(token, signature)
        if outcome.status == AuthStatus.NOT_FOUND:
            raise SessionNotFoundError
        return outcome

    async def get_identity_state(self, token: str) -> IdentityState:
        return await self._core.services.idena.identity_state(token)

    async def get_identity_age(self, token: str) -> IdentityAge:
        return await self._core.services.idena.identity_age(token)

    async def get_identity_stake(self, token: str) -> IdentityStake:
        return await self._core.services.idena.identity_stake(token)

    # === Providers ===
    async def verify(self, provider_type: str, address: str) -> VerifiedPayload:
        """Run a provider check for address. Raises ValidationError for unknown provider types."""
        return await self._core.services.provider.verify(provider_type, address)

    def get_provider_types(self) -> list[str]:
        return self._core.services.provider.provider_types
