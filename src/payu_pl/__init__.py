"""PayU REST API client and webhook verifier."""

from payu_pl.client import Client
from payu_pl.core.config import PayuSettings, clear_config, configure, get_config
from payu_pl.errors import (
    ClientError,
    ConfigurationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    PayloadParseError,
    PayuError,
    RateLimitedError,
    ResponseError,
    ServerError,
    SignatureVerificationError,
    UnauthorizedError,
    ValidationError,
    WebhookError,
)
from payu_pl.webhooks import BufferedRequest, Result, SignatureVerifier, WebhookProcessor

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Client",
    # Config
    "PayuSettings",
    "get_config",
    "configure",
    "clear_config",
    # Webhooks
    "BufferedRequest",
    "Result",
    "SignatureVerifier",
    "WebhookProcessor",
    # Errors
    "PayuError",
    "ConfigurationError",
    "ValidationError",
    "NetworkError",
    "ResponseError",
    "ClientError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "WebhookError",
    "SignatureVerificationError",
    "PayloadParseError",
]
