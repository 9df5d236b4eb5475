"""Error types raised by the gateway.

Everything raised on purpose derives from GatewayError so the HTTP layer can
turn it into a JSON error body with a matching status code.
"""
from typing import Optional


class GatewayError(Exception):
    """Base gateway error.

    Attributes:
        code: machine readable code, e.g. "MISSING_API_KEY".
        message: human readable message.
        http_status: status used when the error reaches the HTTP layer.
    """

    code = "GATEWAY_ERROR"
    http_status = 500

    def __init__(self, message: str, code: Optional[str] = None, http_status: Optional[int] = None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        super().__init__(message)


class MissingCredentialError(GatewayError):
    """No API key was given by the caller and none is configured on the server."""

    code = "MISSING_API_KEY"
    http_status = 400


class UpstreamTransportError(GatewayError):
    """The upstream call failed: network error, error status or undecodable body."""

    code = "UPSTREAM_ERROR"
    http_status = 502

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, http_status=status_code if status_code else None)
        self.status_code = status_code

    @property
    def is_rate_limit(self) -> bool:
        return self.status_code == 429


class UnexpectedChoiceCountError(GatewayError):
    """The chat completion did not contain exactly one choice."""

    code = "UNEXPECTED_CHOICE_COUNT"
    http_status = 502

    def __init__(self, count: Optional[int]):
        super().__init__(f"Expected 1 choice, got {count}")
        self.count = count
