from datetime import timedelta
from typing import Any

import httpx
import structlog

from stampverify.core.core import Service
from stampverify.core.modules.lens.models import LensAccount, LensCheckResult
from stampverify.core.modules.provider.models import VerifiedPayload
from stampverify.errors import UpstreamError
from stampverify.utils import now

logger = structlog.get_logger(__name__)

TOKENS_QUERY = """
query($id: ID!) {
  account(id: $id) {
    tokens(orderBy: created, orderDirection: asc) {
      id
      created
    }
  }
}
"""


class LensService(Service):
    """Verifies that an address owns a Lens token older than the configured minimum age."""

    type = "Lens"

    @property
    def min_token_age(self) -> timedelta:
        return timedelta(days=self.config.lens_min_token_age_days)

    async def verify(self, address: str) -> VerifiedPayload:
        """Check each subgraph in order, stopping at the first one that satisfies the age threshold."""
        result = LensCheckResult()
        for url in self.config.lens_subgraphs:
            result = await self.check_for_tokens(url, address)
            if result.has_tokens:
                break

        record = {"tokens": ",".join(result.token_list)} if result.token_list else {}
        logger.info("lens_verified", address=address, valid=result.has_tokens)
        return VerifiedPayload(valid=result.has_tokens, record=record)

    async def check_for_tokens(self, url: str, address: str) -> LensCheckResult:
        account = await self._fetch_account(url, address)
        if account is None or not account.tokens:
            return LensCheckResult()

        # Tokens come back oldest first
        oldest = account.tokens[0]
        age = now().timestamp() - oldest.created
        if age <= self.min_token_age.total_seconds():
            logger.debug("lens_token_too_young", url=url, address=address, token=oldest.id, age_seconds=age)
            return LensCheckResult()
        return LensCheckResult(has_tokens=True, token_list=[token.id for token in account.tokens])

    async def _fetch_account(self, url: str, address: str) -> LensAccount | None:
        response = await self.core.http_client.post(url, json={"query": TOKENS_QUERY, "variables": {"id": address}})
        if not response.is_success:
            raise UpstreamError("POST", url, response.status_code)

        body: Any = response.json()
        data = body.get("data") if isinstance(body, dict) else None
        account = data.get("account") if isinstance(data, dict) else None
        if account is None:
            return None
        return LensAccount.model_validate(account)
