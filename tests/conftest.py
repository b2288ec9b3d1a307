# Shared fixtures for the WaChat tool adapters.
#
# relay_settings: a fully configured Settings that ignores any local .env
# started_adapters: factory building all five adapters over an httpx.MockTransport
#
# NOTE: We set the WACHAT_* env vars here before any wachat module is imported,
# so the module-level settings used by the HTTP host point at a test relay.

import os

os.environ.setdefault("WACHAT_API_BASE", "https://relay.test")
os.environ.setdefault("WACHAT_API_TOKEN", "test-token")
os.environ.setdefault("WACHAT_SESSION_ID", "test-session")
os.environ.setdefault("WACHAT_HOST_API_KEY", "")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from wachat.config import Settings  # noqa: E402
from wachat.operations import build_adapters  # noqa: E402
from wachat.services.relay_client import RelayClient  # noqa: E402

RELAY_BASE = "https://relay.test"


def make_settings(**overrides) -> Settings:
    values = {
        "API_BASE": RELAY_BASE,
        "API_TOKEN": "test-token",
        "SESSION_ID": "test-session",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def relay_settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def started_adapters():
    """Return a factory: handler (+ Settings overrides) -> {name: OperationAdapter}."""
    relays: list[RelayClient] = []

    async def _factory(handler, **overrides):
        config = make_settings(**overrides)
        relay = RelayClient(config, transport=httpx.MockTransport(handler))
        await relay.startup()
        relays.append(relay)
        return build_adapters(config, relay)

    yield _factory

    for relay in relays:
        await relay.shutdown()
