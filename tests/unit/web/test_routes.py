"""Tests for the HTTP API built on top of App."""

from datetime import timedelta

import pytest
from conftest import ADDRESS, GOOD_SIGNATURE, LENS_MAINNET, LENS_XDAI, OTHER_SIGNATURE, VALIDATION_TIME, lens_account
from fastapi.testclient import TestClient

from stampverify.app import App
from stampverify.web.server import create_fastapi_app


@pytest.fixture
def client(config, clock, transport):
    app = App(config, clock=clock, transport=transport)
    with TestClient(create_fastapi_app(app, config)) as client:
        yield client


def init_session(client):
    response = client.post("/api/v1/session/init")
    assert response.status_code == 200
    return response.json()["token"]


def sign_in(client):
    """Create a session and pass the signature challenge."""
    token = init_session(client)
    client.post("/api/v1/session/start", json={"token": token, "address": ADDRESS})
    response = client.post("/api/v1/session/authenticate", json={"token": token, "signature": GOOD_SIGNATURE})
    assert response.json() == {"ok": True}
    return token


class TestSessionFlow:
    """Tests for init, start and authenticate endpoints."""

    def test_init_returns_token(self, client):
        assert init_session(client).startswith("idena-")

    def test_start_returns_nonce_once(self, client):
        token = init_session(client)

        first = client.post("/api/v1/session/start", json={"token": token, "address": ADDRESS})
        second = client.post("/api/v1/session/start", json={"token": token, "address": "0x1234"})

        assert first.status_code == 200
        assert first.json()["nonce"].startswith("signin-")
        assert second.status_code == 200
        assert second.json() == {"nonce": None}

    def test_authenticate_outcomes(self, client):
        token = init_session(client)

        not_started = client.post("/api/v1/session/authenticate", json={"token": token, "signature": GOOD_SIGNATURE})
        assert not_started.json() == {"ok": None}

        client.post("/api/v1/session/start", json={"token": token, "address": ADDRESS})
        wrong = client.post("/api/v1/session/authenticate", json={"token": token, "signature": OTHER_SIGNATURE})
        right = client.post("/api/v1/session/authenticate", json={"token": token, "signature": GOOD_SIGNATURE})
        again = client.post("/api/v1/session/authenticate", json={"token": token, "signature": GOOD_SIGNATURE})

        assert wrong.json() == {"ok": False}
        assert right.json() == {"ok": True}
        assert again.json() == {"ok": None}

    def test_unknown_token_is_not_found(self, client):
        start = client.post("/api/v1/session/start", json={"token": "idena-unknown", "address": ADDRESS})
        auth = client.post("/api/v1/session/authenticate", json={"token": "idena-unknown", "signature": GOOD_SIGNATURE})
        identity = client.get("/api/v1/session/identity", params={"token": "idena-unknown"})

        for response in (start, auth, identity):
            assert response.status_code == 404
            assert response.json() == {"message": "session not found or expired", "type": "not_found"}

    def test_expired_session_is_not_found(self, client, clock):
        token = sign_in(client)
        clock.advance(300)

        response = client.get("/api/v1/session/identity", params={"token": token})
        assert response.status_code == 404

    def test_missing_fields_rejected(self, client):
        response = client.post("/api/v1/session/start", json={"token": "idena-x"})
        assert response.status_code == 422


class TestIdentityQueries:
    """Tests for authenticated identity endpoints."""

    def test_identity(self, client):
        token = sign_in(client)
        response = client.get("/api/v1/session/identity", params={"token": token})

        assert response.status_code == 200
        assert response.json() == {"address": ADDRESS, "state": "Human", "expirationDate": VALIDATION_TIME}

    def test_age_and_stake(self, client):
        token = sign_in(client)

        age = client.get("/api/v1/session/age", params={"token": token}).json()
        stake = client.get("/api/v1/session/stake", params={"token": token}).json()

        assert age == {"address": ADDRESS, "age": 12, "expirationDate": VALIDATION_TIME}
        assert stake == {"address": ADDRESS, "stake": 1534.75, "expirationDate": VALIDATION_TIME}

    def test_not_authenticated(self, client):
        token = init_session(client)
        client.post("/api/v1/session/start", json={"token": token, "address": ADDRESS})

        response = client.get("/api/v1/session/age", params={"token": token})
        assert response.status_code == 401
        assert response.json() == {"message": "authentication not passed", "type": "authentication_error"}

    def test_upstream_failure(self, client, upstream):
        token = sign_in(client)
        upstream.status_overrides[f"/api/address/{ADDRESS}"] = 500

        response = client.get("/api/v1/session/stake", params={"token": token})
        assert response.status_code == 502
        assert response.json()["type"] == "upstream_error"


class TestProviders:
    """Tests for provider verification endpoints."""

    def test_list_providers(self, client):
        assert client.get("/api/v1/providers").json() == ["Lens"]

    def test_verify_lens_valid(self, client, upstream):
        upstream.lens_accounts[LENS_MAINNET] = lens_account(("0x01", timedelta(days=16)))

        response = client.post("/api/v1/verify", json={"type": "Lens", "address": ADDRESS})
        assert response.status_code == 200
        assert response.json() == {"valid": True, "record": {"tokens": "0x01"}}

    def test_verify_lens_invalid(self, client, upstream):
        upstream.lens_accounts[LENS_MAINNET] = lens_account(("0x01", timedelta(days=1)))
        upstream.lens_accounts[LENS_XDAI] = None

        response = client.post("/api/v1/verify", json={"type": "Lens", "address": ADDRESS})
        assert response.json() == {"valid": False, "record": {}}

    def test_unknown_provider(self, client):
        response = client.post("/api/v1/verify", json={"type": "Twitter", "address": ADDRESS})
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
