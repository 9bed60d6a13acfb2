"""PayU Webhook Verification Module.

Authenticates PayU notifications using the shop's second key and parses
their JSON payload.

Supported algorithms (``algorithm`` segment of ``OpenPayU-Signature``):
- SHA256 (default when the segment is absent)
- SHA / SHA1, SHA384, SHA512 (HMAC)
- MD5 (plain digest, body+key or key+body)
- Any other digest name hashlib supports, as HMAC

Usage:
    from payu_pl.webhooks import BufferedRequest, WebhookProcessor

    processor = WebhookProcessor(secret="second-key")
    result = processor.validate_and_parse(
        BufferedRequest(headers=request.headers, body=request.body)
    )

    if result.is_success:
        order = result.data["order"]
    else:
        print(f"Rejected: {result.error}")
"""

from payu_pl.webhooks.processor import (
    OrderStatus,
    WebhookProcessor,
    format_minor_units,
    http_status_for,
    order_summary,
    validate_and_parse,
)
from payu_pl.webhooks.request import (
    SIGNATURE_HEADER,
    BufferedRequest,
    RawRequest,
    as_raw_request,
)
from payu_pl.webhooks.result import Result
from payu_pl.webhooks.verifier import (
    DEFAULT_ALGORITHM,
    SignatureVerifier,
    VerificationResult,
    VerificationStatus,
    build_signature_header,
    compute_signature,
    constant_time_compare,
    parse_signature_header,
)

__all__ = [
    # Core
    "SignatureVerifier",
    "WebhookProcessor",
    "VerificationResult",
    "VerificationStatus",
    "Result",
    # Requests
    "RawRequest",
    "BufferedRequest",
    "SIGNATURE_HEADER",
    "as_raw_request",
    # Helpers
    "DEFAULT_ALGORITHM",
    "OrderStatus",
    "build_signature_header",
    "compute_signature",
    "constant_time_compare",
    "format_minor_units",
    "http_status_for",
    "order_summary",
    "parse_signature_header",
    "validate_and_parse",
]
