"""Unit tests for wachat/services/relay_client.py.

Uses httpx.MockTransport so no real network calls are made.
"""

import json

import httpx
import pytest

from wachat.config import Settings
from wachat.errors import TransportError
from wachat.services.payload_builder import RelayRequest
from wachat.services.relay_client import RelayClient

SEND = RelayRequest(method="POST", path="/messages/send/", json={"jid": "521", "type": "number", "message": {"text": "hi"}})
SEARCH = RelayRequest(method="GET", path="/groups/search", params={"name": "Familia"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _settings(api_base: str = "https://relay.test") -> Settings:
    return Settings(_env_file=None, API_BASE=api_base, API_TOKEN="tok", SESSION_ID="sess")


async def _started_client(handler, api_base: str = "https://relay.test") -> RelayClient:
    rc = RelayClient(_settings(api_base), transport=httpx.MockTransport(handler))
    await rc.startup()
    return rc


# ---------------------------------------------------------------------------
# Lifecycle tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_startup_creates_client():
    rc = RelayClient(_settings())
    assert rc._client is None
    await rc.startup()
    assert rc._client is not None
    await rc.shutdown()
    assert rc._client is None


@pytest.mark.asyncio
async def test_client_property_raises_before_startup():
    rc = RelayClient(_settings())
    with pytest.raises(RuntimeError, match="not initialized"):
        _ = rc.client


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_send_posts_json_with_bearer_token():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "X"})

    rc = await _started_client(handler)
    resp = await rc.send(SEND)
    await rc.shutdown()

    assert len(captured) == 1
    req = captured[0]
    assert req.method == "POST"
    assert str(req.url) == "https://relay.test/messages/send/"
    assert req.headers["Authorization"] == "Bearer tok"
    assert req.headers["Content-Type"] == "application/json"
    assert json.loads(req.content) == SEND.json
    assert resp.ok
    assert resp.body == {"id": "X"}


@pytest.mark.asyncio
async def test_search_is_get_with_query_and_no_content_type():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"data": []})

    rc = await _started_client(handler)
    await rc.send(SEARCH)
    await rc.shutdown()

    req = captured[0]
    assert req.method == "GET"
    assert req.url.path == "/groups/search"
    assert req.url.params["name"] == "Familia"
    assert "Content-Type" not in req.headers
    assert req.headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_api_base_path_prefix_is_kept():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "X"})

    rc = await _started_client(handler, api_base="https://relay.test/api/v2")
    await rc.send(SEND)
    await rc.shutdown()

    assert captured[0].url.path == "/api/v2/messages/send/"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_non_2xx_is_returned_not_raised():
    rc = await _started_client(lambda r: httpx.Response(401, json={"message": "Invalid token"}))
    resp = await rc.send(SEND)
    await rc.shutdown()

    assert resp.ok is False
    assert resp.status_code == 401
    assert resp.reason == "Unauthorized"
    assert resp.body == {"message": "Invalid token"}


@pytest.mark.asyncio
async def test_non_2xx_with_html_body_has_no_body():
    rc = await _started_client(lambda r: httpx.Response(502, text="<html>Bad Gateway</html>"))
    resp = await rc.send(SEND)
    await rc.shutdown()

    assert resp.status_code == 502
    assert resp.body is None


@pytest.mark.asyncio
async def test_malformed_json_on_success_raises_transport_error():
    rc = await _started_client(lambda r: httpx.Response(200, text="not json"))
    with pytest.raises(TransportError, match="Malformed JSON"):
        await rc.send(SEND)
    await rc.shutdown()


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    rc = await _started_client(handler)
    with pytest.raises(TransportError, match="connection refused"):
        await rc.send(SEND)
    await rc.shutdown()


@pytest.mark.asyncio
async def test_timeout_without_message_uses_exception_name():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("", request=request)

    rc = await _started_client(handler)
    with pytest.raises(TransportError, match="ReadTimeout"):
        await rc.send(SEND)
    await rc.shutdown()
