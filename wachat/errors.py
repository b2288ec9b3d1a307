"""Error taxonomy for the operation adapter layer.

Every class carries a ``kind`` marker that survives into the failure
envelope so a host can tell a bad input from a relay outage without parsing
the message text.
"""


class WachatError(Exception):
    kind = "WachatError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(WachatError):
    """WACHAT_API_TOKEN or WACHAT_SESSION_ID is missing."""

    kind = "ConfigurationError"


class ValidationError(WachatError):
    """Operation input failed its contract."""

    kind = "ValidationError"

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class TransportError(WachatError):
    """Network failure or an unparsable 2xx body."""

    kind = "TransportError"


class UpstreamError(WachatError):
    """The relay answered but refused the operation."""

    kind = "UpstreamError"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NormalizationError(WachatError):
    """A 2xx body matched no known shape or failed output validation."""

    kind = "NormalizationError"


INTERNAL_ERROR_KIND = "InternalError"
