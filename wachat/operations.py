from typing import Any

from wachat.adapter import Operation, OperationAdapter
from wachat.config import Settings
from wachat.errors import ValidationError
from wachat.registry import schemas
from wachat.services import payload_builder
from wachat.services.normalizer import (
    OperationResult,
    extract_groups,
    extract_message_id,
    extract_message_key,
)
from wachat.services.relay_client import RelayClient

OPERATIONS = [
    Operation(schemas.get("sendMessage"), payload_builder.build_text_request, extract_message_key),
    Operation(schemas.get("sendLocation"), payload_builder.build_location_request, extract_message_key),
    Operation(schemas.get("sendImage"), payload_builder.build_image_request, extract_message_key),
    Operation(schemas.get("sendReaction"), payload_builder.build_reaction_request, extract_message_id),
    Operation(schemas.get("searchGroups"), payload_builder.build_search_groups_request, extract_groups),
]


def build_adapters(settings: Settings, client: RelayClient) -> dict[str, OperationAdapter]:
    """One adapter per operation, keyed by operation name."""
    return {op.name: OperationAdapter(op, settings, client) for op in OPERATIONS}


async def invoke(
    adapters: dict[str, OperationAdapter], name: str, raw_input: dict[str, Any] | None
) -> OperationResult:
    """Run operation *name*; an unknown name is a ValidationError result."""
    try:
        contract = schemas.get(name)
    except ValidationError as exc:
        return OperationResult.from_error(exc)
    return await adapters[contract.name].execute(raw_input)
