"""Per-operation input/output contracts.

The registry is the single place a host looks up what an operation accepts
and returns. Validation failures are reported as ``wachat.errors`` types so
the adapter can fold them into the envelope.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from wachat.errors import NormalizationError, ValidationError
from wachat.models.operations import (
    ReactionResult,
    SearchGroupsInput,
    SearchGroupsResult,
    SendImageInput,
    SendLocationInput,
    SendMessageInput,
    SendReactionInput,
    SendResult,
)


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<input>"


def _describe(exc: PydanticValidationError) -> tuple[str, list[str]]:
    fields = []
    problems = []
    for err in exc.errors():
        path = _field_path(err["loc"])
        if path not in fields:
            fields.append(path)
        problems.append(f"{path}: {err['msg']}")
    return "; ".join(problems), fields


@dataclass(frozen=True)
class OperationContract:
    name: str
    description: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]

    def validate_input(self, raw: Mapping[str, Any] | None) -> BaseModel:
        """Return the validated input model or raise ``ValidationError``."""
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"Invalid input for {self.name}: expected an object, got {type(raw).__name__}",
                fields=["<input>"],
            )
        try:
            return self.input_model.model_validate(dict(raw))
        except PydanticValidationError as exc:
            detail, fields = _describe(exc)
            raise ValidationError(f"Invalid input for {self.name}: {detail}", fields=fields) from exc

    def validate_output(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Run relay-derived *data* through the output contract.

        Returns the envelope dict with absent fields omitted.
        """
        try:
            result = self.output_model.model_validate({"success": True, **data})
        except PydanticValidationError as exc:
            detail, _ = _describe(exc)
            raise NormalizationError(
                f"{self.name} response failed validation: {detail}"
            ) from exc
        return result.model_dump(exclude_none=True)

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def output_schema(self) -> dict[str, Any]:
        return self.output_model.model_json_schema()


class SchemaRegistry:
    def __init__(self, contracts: Iterable[OperationContract]) -> None:
        self._contracts = {c.name: c for c in contracts}

    def __contains__(self, name: object) -> bool:
        return name in self._contracts

    def __iter__(self):
        return iter(self._contracts.values())

    def names(self) -> list[str]:
        return list(self._contracts)

    def get(self, name: str) -> OperationContract:
        try:
            return self._contracts[name]
        except KeyError:
            raise ValidationError(f"Unknown operation: {name}", fields=["name"]) from None

    def validate(self, name: str, raw: Mapping[str, Any] | None) -> BaseModel:
        return self.get(name).validate_input(raw)


SEND_MESSAGE = OperationContract(
    name="sendMessage",
    description="Send a text message to a WhatsApp contact or group.",
    input_model=SendMessageInput,
    output_model=SendResult,
)

SEND_LOCATION = OperationContract(
    name="sendLocation",
    description="Send a location message to a WhatsApp contact or group.",
    input_model=SendLocationInput,
    output_model=SendResult,
)

SEND_IMAGE = OperationContract(
    name="sendImage",
    description="Send an image (by URL) with an optional caption to a WhatsApp contact or group.",
    input_model=SendImageInput,
    output_model=SendResult,
)

SEND_REACTION = OperationContract(
    name="sendReaction",
    description="React with a single emoji to a previously sent WhatsApp message.",
    input_model=SendReactionInput,
    output_model=ReactionResult,
)

SEARCH_GROUPS = OperationContract(
    name="searchGroups",
    description="Search WhatsApp groups by name. Omit the name to list every group.",
    input_model=SearchGroupsInput,
    output_model=SearchGroupsResult,
)

schemas = SchemaRegistry([SEND_MESSAGE, SEND_LOCATION, SEND_IMAGE, SEND_REACTION, SEARCH_GROUPS])
