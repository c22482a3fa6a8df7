"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import pytest

from stampverify.config import Config
from stampverify.core.clock import ManualClock
from stampverify.core.core import Core

IDENA_API_URL = "https://idena.test"
LENS_MAINNET = "https://subgraph.test/lens"
LENS_XDAI = "https://subgraph.test/lens-xdai"

ADDRESS = "0xAbC0000000000000000000000000000000000001"
GOOD_SIGNATURE = "0xsigned-by-address"
OTHER_SIGNATURE = "0xsigned-by-someone-else"
VALIDATION_TIME = "2026-10-24T13:30:00Z"


class FakeUpstream:
    """In-memory stand-in for the Idena API and the Lens subgraphs."""

    def __init__(self) -> None:
        self.signers: dict[str, str] = {
            GOOD_SIGNATURE: ADDRESS.lower(),
            OTHER_SIGNATURE: "0x9999999999999999999999999999999999999999",
        }
        self.identity = {"state": "Human"}
        self.age = "12"
        self.stake = "1534.75"
        self.status_overrides: dict[str, int] = {}
        self.body_overrides: dict[str, Any] = {}
        self.fail_with: Exception | None = None
        self.lens_accounts: dict[str, dict[str, Any] | None] = {}
        self.requests: list[httpx.Request] = []

    def paths(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    def lens_requests(self, url: str) -> list[httpx.Request]:
        return [request for request in self.requests if str(request.url) == url]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        path = request.url.path
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path], json={"error": "boom"})
        if path in self.body_overrides:
            return httpx.Response(200, json=self.body_overrides[path])

        url = str(request.url)
        if url in self.lens_accounts:
            return httpx.Response(200, json={"data": {"account": self.lens_accounts[url]}})

        if path == "/api/SignatureAddress":
            signature = request.url.params["signature"]
            return httpx.Response(200, json={"result": self.signers.get(signature, "")})
        if path == "/api/epoch/last":
            return httpx.Response(200, json={"result": {"epoch": 120, "validationTime": VALIDATION_TIME}})
        if path.startswith("/api/identity/") and path.endswith("/age"):
            return httpx.Response(200, json={"result": self.age})
        if path.startswith("/api/identity/"):
            return httpx.Response(200, json={"result": self.identity})
        if path.startswith("/api/address/"):
            return httpx.Response(200, json={"result": {"stake": self.stake, "balance": "10"}})
        return httpx.Response(404, json={"error": "not found"})


def lens_account(*tokens: tuple[str, timedelta]) -> dict[str, Any]:
    """Build a subgraph account whose tokens were created `age` ago, oldest first."""
    current = datetime.now(UTC)
    return {"tokens": [{"id": token_id, "created": str(int((current - age).timestamp()))} for token_id, age in tokens]}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return ManualClock(start=1000.0)


@pytest.fixture
def config():
    return Config(
        idena_api_url=IDENA_API_URL,
        lens_subgraphs=[LENS_MAINNET, LENS_XDAI],
        session_ttl=300.0,
        session_expiry_mode="timer",
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def transport(upstream):
    return httpx.MockTransport(upstream.handler)


@pytest.fixture
async def core(config, clock, transport) -> AsyncGenerator[Core]:
    """Started Core wired to the fake upstream and a manual clock."""
    core = Core(config, clock=clock, transport=transport)
    async with core.lifespan():
        yield core
