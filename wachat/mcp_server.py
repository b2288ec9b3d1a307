"""MCP stdio host for the WaChat tools.

Start with:
    wachat-mcp            (console script)
    python -m wachat.mcp_server

Logs go to stderr; stdout carries the JSON-RPC stream.
"""

import asyncio
import json

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from wachat.adapter import OperationAdapter
from wachat.config import Settings, settings
from wachat.logging_setup import configure_logging
from wachat.operations import build_adapters, invoke
from wachat.services.normalizer import OperationResult
from wachat.services.relay_client import RelayClient

logger = structlog.get_logger()

SERVER_NAME = "mcp-wachat"
SERVER_VERSION = "1.0.0"


def _content(result: OperationResult) -> list[types.TextContent]:
    if result.success:
        text = json.dumps(result.to_envelope(), ensure_ascii=False)
    else:
        text = f"[{result.error_kind}] {result.error}"
    return [types.TextContent(type="text", text=text)]


def create_server(adapters: dict[str, OperationAdapter]) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=adapter.name,
                description=adapter.contract.description,
                inputSchema=adapter.contract.input_schema(),
                outputSchema=adapter.contract.output_schema(),
            )
            for adapter in adapters.values()
        ]

    # the adapter validates input; failures keep the envelope shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> types.CallToolResult:
        result = await invoke(adapters, name, arguments)
        return types.CallToolResult(
            content=_content(result),
            structuredContent=result.to_envelope(),
            isError=not result.success,
        )

    return server


async def serve(config: Settings) -> None:
    configure_logging(config.LOG_LEVEL)
    relay = RelayClient(config)
    await relay.startup()
    server = create_server(build_adapters(config, relay))
    logger.info("wachat_mcp_started", api_base=config.API_BASE, credentials=config.has_credentials)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await relay.shutdown()
        logger.info("wachat_mcp_stopped")


def main() -> None:
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
