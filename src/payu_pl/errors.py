"""PayU SDK exception hierarchy.

Client-side failures (validation, network, HTTP status) and webhook
failures share a single base class so callers can catch ``PayuError``
at an integration boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from payu_pl.webhooks.verifier import VerificationStatus


class PayuError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(PayuError):
    """Required settings are missing or invalid."""


class ValidationError(PayuError):
    """Request parameters failed a validation contract."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        input: Any = None,
        message: str = "Validation failed",
    ) -> None:
        super().__init__(message)
        self.errors = errors
        self.input = input


class NetworkError(PayuError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str = "Network error", original: BaseException | None = None) -> None:
        super().__init__(message)
        self.original = original


class ResponseError(PayuError):
    """PayU answered with an error status."""

    def __init__(
        self,
        message: str,
        http_status: int,
        correlation_id: str | None = None,
        raw_body: str | None = None,
        parsed_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.correlation_id = correlation_id
        self.raw_body = raw_body
        self.parsed_body = parsed_body


class ClientError(ResponseError):
    pass


class UnauthorizedError(ClientError):
    pass


class ForbiddenError(ClientError):
    pass


class NotFoundError(ClientError):
    pass


class RateLimitedError(ClientError):
    pass


class ServerError(ResponseError):
    pass


class WebhookError(PayuError):
    """Base class for per-request webhook failures."""


class SignatureVerificationError(WebhookError):
    """The notification signature could not be verified."""

    def __init__(self, message: str, status: VerificationStatus) -> None:
        super().__init__(message)
        self.status = status


class PayloadParseError(WebhookError):
    """The notification body is not valid JSON."""
