"""HTTP host for the WaChat tools.

Run with:
    uvicorn wachat.main:app
"""

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Body, Depends, FastAPI, Response

from wachat.config import settings
from wachat.logging_setup import configure_logging
from wachat.middleware.auth import require_api_key
from wachat.operations import build_adapters, invoke
from wachat.registry import OperationContract
from wachat.services.relay_client import RelayClient

logger = structlog.get_logger()

ERROR_KIND_HEADER = "X-Wachat-Error-Kind"

relay = RelayClient(settings)
adapters = build_adapters(settings, relay)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await relay.startup()
    logger.info("wachat_http_started", api_base=settings.API_BASE, credentials=settings.has_credentials)
    yield
    await relay.shutdown()
    logger.info("wachat_http_stopped")


app = FastAPI(title="WaChat Tools", lifespan=lifespan)


def describe(contract: OperationContract) -> dict[str, Any]:
    return {
        "name": contract.name,
        "description": contract.description,
        "inputSchema": contract.input_schema(),
        "outputSchema": contract.output_schema(),
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/tools", dependencies=[Depends(require_api_key)])
async def list_tools() -> list[dict[str, Any]]:
    return [describe(adapter.contract) for adapter in adapters.values()]


@app.post("/tools/{name}", dependencies=[Depends(require_api_key)])
async def call_tool(
    name: str,
    response: Response,
    arguments: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any]:
    result = await invoke(adapters, name, arguments)
    if not result.success and result.error_kind:
        response.headers[ERROR_KIND_HEADER] = result.error_kind
    return result.to_envelope()
