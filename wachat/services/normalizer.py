"""Relay response → uniform operation result.

The relay has been seen answering the same send call in two incompatible
layouts, with no sign of which one is current:

    nested  {"content": [{"text": {"status": "PENDING", "key": {...}}}]}
    flat    {"id": "...", ...}

Bodies are probed into one of the tagged variants below and each variant is
mapped explicitly. Nothing untyped leaves this module, and ``normalize``
never raises.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

import structlog

from wachat.errors import NormalizationError, UpstreamError, WachatError
from wachat.services.relay_client import RelayResponse

logger = structlog.get_logger()

ACCEPTED_STATUS = "PENDING"
_KEY_FIELDS = ("remoteJid", "fromMe", "id", "participant")


# ---------------------------------------------------------------------------
# Result envelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OperationResult:
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None
    error_kind: str | None = None  # diagnostic only, not part of the envelope

    @classmethod
    def ok(cls, data: dict[str, Any]) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, kind: str) -> "OperationResult":
        return cls(success=False, error=error or "Unknown error", error_kind=kind)

    @classmethod
    def from_error(cls, exc: WachatError) -> "OperationResult":
        return cls.failure(exc.message, exc.kind)

    def to_envelope(self) -> dict[str, Any]:
        """The structured output a host forwards: ``{success, ...data}`` or ``{success, error}``."""
        if self.success:
            return {"success": True, **(self.data or {})}
        return {"success": False, "error": self.error}


# ---------------------------------------------------------------------------
# Send acknowledgement shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NestedAck:
    status: Any
    key: Mapping[str, Any]


@dataclass(frozen=True)
class FlatAck:
    id: str
    key: Mapping[str, Any]


SendAck = Union[NestedAck, FlatAck]


def _nested_text(body: Mapping[str, Any]) -> Mapping[str, Any] | None:
    content = body.get("content")
    if not isinstance(content, list) or not content:
        return None
    first = content[0]
    if not isinstance(first, Mapping):
        return None
    text = first.get("text")
    return text if isinstance(text, Mapping) else None


def probe_send_ack(body: Any) -> SendAck:
    """Classify a 2xx send body. Nested wins when both could match."""
    if not isinstance(body, Mapping):
        raise NormalizationError(
            f"Unrecognized relay response: expected an object, got {type(body).__name__}"
        )

    text = _nested_text(body)
    if text is not None:
        key = text.get("key")
        return NestedAck(status=text.get("status"), key=key if isinstance(key, Mapping) else {})

    ident = body.get("id")
    if isinstance(ident, str) and ident:
        return FlatAck(id=ident, key={f: body[f] for f in _KEY_FIELDS if f in body})

    raise NormalizationError("Unrecognized relay response: neither content[0].text nor id present")


def _accepted_key(ack: SendAck, operation: str) -> dict[str, Any]:
    if isinstance(ack, NestedAck):
        if ack.status != ACCEPTED_STATUS:
            raise UpstreamError(f"{operation} was not accepted by the relay (status: {ack.status})")
        if not ack.key.get("id"):
            raise NormalizationError(f"{operation} response is missing key.id")
    # null key fields are omitted, never surfaced as null
    return {k: v for k, v in ack.key.items() if k in _KEY_FIELDS and v is not None}


# ---------------------------------------------------------------------------
# Extractors, one per output shape
# ---------------------------------------------------------------------------


def extract_message_key(body: Any, operation: str) -> dict[str, Any]:
    return {"messageKey": _accepted_key(probe_send_ack(body), operation)}


def extract_message_id(body: Any, operation: str) -> dict[str, Any]:
    return {"messageId": _accepted_key(probe_send_ack(body), operation)["id"]}


def extract_groups(body: Any, operation: str) -> dict[str, Any]:
    if isinstance(body, Mapping) and isinstance(body.get("data"), list):
        groups = body["data"]
    elif isinstance(body, list):
        groups = body
    else:
        raise NormalizationError(f"{operation} response has no group list")
    return {"groups": groups}


Extractor = Callable[[Any, str], dict[str, Any]]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def upstream_error_message(response: RelayResponse, operation: str) -> str:
    body = response.body
    if isinstance(body, Mapping):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return f"{operation} failed: {response.status_code} {response.reason}".rstrip()


def normalize(
    response: RelayResponse,
    operation: str,
    extract: Extractor,
    validate: Callable[[Mapping[str, Any]], dict[str, Any]],
) -> OperationResult:
    """Map a relay response to an ``OperationResult``.

    *validate* is the operation's output contract; whatever it rejects becomes
    a ``NormalizationError`` result rather than a partially valid payload.
    """
    log = logger.bind(operation=operation, status=response.status_code)

    if not response.ok:
        message = upstream_error_message(response, operation)
        log.warning("relay_rejected_operation", error=message)
        return OperationResult.failure(message, UpstreamError.kind)

    try:
        envelope = validate(extract(response.body, operation))
    except WachatError as exc:
        log.warning("relay_response_unusable", kind=exc.kind, error=exc.message)
        return OperationResult.from_error(exc)
    except Exception as exc:
        log.exception("relay_response_normalization_crashed")
        return OperationResult.failure(f"Could not interpret relay response: {exc}", NormalizationError.kind)

    envelope.pop("success", None)
    return OperationResult.ok(envelope)
