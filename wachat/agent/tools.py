"""LangChain wrappers so an agent graph can bind the WaChat operations.

    tools = build_tools(build_adapters(settings, relay))
    llm.bind_tools(tools)
"""

from langchain_core.tools import StructuredTool

from wachat.adapter import OperationAdapter


def as_tool(adapter: OperationAdapter) -> StructuredTool:
    async def _run(**kwargs) -> dict:
        result = await adapter.execute(kwargs)
        return result.to_envelope()

    # plain JSON schema: the adapter validates, so bad arguments return a failure envelope
    return StructuredTool.from_function(
        coroutine=_run,
        name=adapter.name,
        description=adapter.contract.description,
        args_schema=adapter.contract.input_schema(),
    )


def build_tools(adapters: dict[str, OperationAdapter]) -> list[StructuredTool]:
    return [as_tool(adapter) for adapter in adapters.values()]
