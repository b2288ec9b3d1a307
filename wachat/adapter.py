"""Generic operation pipeline: the unit a host invokes.

    validate → check credentials → build request → send → normalize

One pass, no retries. Every failure comes back as an ``OperationResult``;
nothing raised below this boundary reaches the host.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel

from wachat.config import Settings
from wachat.errors import INTERNAL_ERROR_KIND, ConfigurationError, WachatError
from wachat.registry import OperationContract
from wachat.services.normalizer import Extractor, OperationResult, normalize
from wachat.services.payload_builder import RelayRequest
from wachat.services.relay_client import RelayClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class Operation:
    contract: OperationContract
    build_request: Callable[[Any], RelayRequest]
    extract: Extractor

    @property
    def name(self) -> str:
        return self.contract.name


def require_credentials(settings: Settings) -> None:
    missing = [
        env
        for env, value in (
            ("WACHAT_API_TOKEN", settings.API_TOKEN),
            ("WACHAT_SESSION_ID", settings.SESSION_ID),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Server configuration error: {' and '.join(missing)} not set."
        )


class OperationAdapter:
    def __init__(self, operation: Operation, settings: Settings, client: RelayClient) -> None:
        self._operation = operation
        self._settings = settings
        self._client = client

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def contract(self) -> OperationContract:
        return self._operation.contract

    async def execute(self, raw_input: Mapping[str, Any] | None) -> OperationResult:
        log = logger.bind(operation=self.name)
        try:
            params: BaseModel = self.contract.validate_input(raw_input)
            require_credentials(self._settings)
            request = self._operation.build_request(params)
            response = await self._client.send(request)
        except WachatError as exc:
            log.warning("operation_failed", kind=exc.kind, error=exc.message)
            return OperationResult.from_error(exc)
        except Exception as exc:
            log.exception("operation_crashed")
            return OperationResult.failure(
                f"Unexpected error while running {self.name}: {exc}", INTERNAL_ERROR_KIND
            )

        result = normalize(
            response, self.name, self._operation.extract, self.contract.validate_output
        )
        if result.success:
            log.info("operation_succeeded")
        return result
