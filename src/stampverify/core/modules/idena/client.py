"""Calls to the Idena indexer REST API."""

from typing import Any

import httpx

from stampverify.errors import UpstreamError

ADDRESS_PLACEHOLDER = "_address_"


def _json_object(response: httpx.Response) -> dict[str, Any]:
    body = response.json()
    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object from {response.url.path}, got {type(body).__name__}")
    return body


async def get_json(client: httpx.AsyncClient, path: str) -> dict[str, Any]:
    """GET `path` and return the decoded body, raising UpstreamError unless status is 200."""
    response = await client.get(path)
    if response.status_code != httpx.codes.OK:
        raise UpstreamError("GET", path, response.status_code)
    return _json_object(response)


async def request_signature_address(client: httpx.AsyncClient, nonce: str, signature: str) -> str | None:
    """Recover the address that produced `signature` over `nonce`."""
    response = await client.get("/api/SignatureAddress", params={"value": nonce, "signature": signature})
    if response.status_code != httpx.codes.OK:
        raise UpstreamError("GET", "/api/SignatureAddress", response.status_code)
    result = _json_object(response).get("result")
    if result is not None and not isinstance(result, str):
        raise ValueError(f"Unexpected SignatureAddress result: {result!r}")
    return result


async def request_last_epoch_validation_time(client: httpx.AsyncClient) -> str:
    data = await get_json(client, "/api/epoch/last")
    try:
        validation_time = data["result"]["validationTime"]
    except (KeyError, TypeError) as e:
        raise ValueError("Epoch response has no result.validationTime") from e
    if validation_time is None:
        raise ValueError("Epoch response has a null result.validationTime")
    return str(validation_time)
