from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from wachat.config import Settings
from wachat.errors import TransportError
from wachat.services.payload_builder import RelayRequest

logger = structlog.get_logger()


@dataclass(frozen=True)
class RelayResponse:
    status_code: int
    reason: str
    body: Any  # parsed JSON; None when a non-2xx body was not JSON

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


class RelayClient:
    """HTTP exchange with the WaChat relay.

    Does not interpret bodies and does not raise on non-2xx: the status and
    parsed body go back to the caller for classification.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport
        # Populated by startup(); None until then
        self._client: httpx.AsyncClient | None = None

    async def startup(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._settings.API_BASE,
            timeout=httpx.Timeout(self._settings.HTTP_TIMEOUT_SECONDS, connect=5.0),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            transport=self._transport,
        )

    async def shutdown(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("RelayClient not initialized, call startup() first")
        return self._client

    def _headers(self, request: RelayRequest) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._settings.API_TOKEN}"}
        if request.method != "GET":
            headers["Content-Type"] = "application/json"
        return headers

    async def send(self, request: RelayRequest) -> RelayResponse:
        log = logger.bind(method=request.method, path=request.path)
        try:
            resp = await self.client.request(
                request.method,
                request.path,
                params=request.params,
                json=request.json,
                headers=self._headers(request),
            )
        except httpx.HTTPError as exc:
            detail = str(exc) or exc.__class__.__name__
            log.warning("relay_request_failed", error=detail)
            raise TransportError(f"Could not reach the WaChat relay: {detail}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            if resp.is_success:
                log.warning("relay_malformed_body", status=resp.status_code, body=resp.text[:200])
                raise TransportError(
                    f"Malformed JSON body from the WaChat relay ({resp.status_code})"
                ) from exc
            body = None

        log.info("relay_response", status=resp.status_code)
        return RelayResponse(status_code=resp.status_code, reason=resp.reason_phrase, body=body)
