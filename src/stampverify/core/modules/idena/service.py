from typing import Any

import structlog

from stampverify.core.core import Service
from stampverify.core.modules.idena.client import (
    ADDRESS_PLACEHOLDER,
    get_json,
    request_last_epoch_validation_time,
    request_signature_address,
)
from stampverify.core.modules.idena.models import IdentityAge, IdentityStake, IdentityState
from stampverify.errors import NotAuthenticatedError

logger = structlog.get_logger(__name__)


class IdenaService(Service):
    """Queries against the Idena API made on behalf of an authenticated session."""

    async def signature_address(self, nonce: str, signature: str) -> str | None:
        return await request_signature_address(self.core.idena_client, nonce, signature)

    async def authenticated_request(self, token: str, path_template: str) -> dict[str, Any]:
        """GET `path_template` with `_address_` replaced by the session address.

        Raises:
            SessionNotFoundError: token unknown or expired
            NotAuthenticatedError: the session has no accepted signature
            UpstreamError: the API answered with a status other than 200
        """
        session = self.core.services.session.require_session(token)
        if session.signature is None or session.address is None:
            raise NotAuthenticatedError

        path = path_template.replace(ADDRESS_PLACEHOLDER, session.address)
        data = await get_json(self.core.idena_client, path)
        return {**data, "address": session.address}

    async def validation_time(self, token: str) -> str:
        """Validation time of the last epoch, fetched once per session."""
        session = self.core.services.session.require_session(token)
        if session.cached_expiration_date is None:
            session.cached_expiration_date = await request_last_epoch_validation_time(self.core.idena_client)
            logger.debug("validation_time_cached", token=token, validation_time=session.cached_expiration_date)
        return session.cached_expiration_date

    async def identity_state(self, token: str) -> IdentityState:
        data = await self.authenticated_request(token, f"/api/identity/{ADDRESS_PLACEHOLDER}")
        expiration_date = await self.validation_time(token)
        return IdentityState(address=data["address"], state=data["result"]["state"], expiration_date=expiration_date)

    async def identity_age(self, token: str) -> IdentityAge:
        data = await self.authenticated_request(token, f"/api/identity/{ADDRESS_PLACEHOLDER}/age")
        expiration_date = await self.validation_time(token)
        return IdentityAge(address=data["address"], age=int(data["result"]), expiration_date=expiration_date)

    async def identity_stake(self, token: str) -> IdentityStake:
        data = await self.authenticated_request(token, f"/api/address/{ADDRESS_PLACEHOLDER}")
        expiration_date = await self.validation_time(token)
        return IdentityStake(address=data["address"], stake=float(data["result"]["stake"]), expiration_date=expiration_date)
