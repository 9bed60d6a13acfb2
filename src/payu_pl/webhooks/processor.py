"""PayU Webhook Processor.

Reads the notification body once, verifies the ``OpenPayU-Signature``
header and parses the JSON payload.

Two call styles share the same checks:

* ``validate_and_parse`` returns a ``Result`` and never raises for
  per-request failures (missing or bad signature, invalid JSON).
* ``verify_signature`` / ``parse_payload`` raise
  ``SignatureVerificationError`` / ``PayloadParseError``.

Usage (Flask):
    processor = WebhookProcessor(secret=settings.PAYU_SECOND_KEY)

    @app.post("/webhooks/payu")
    def payu_webhook():
        request_ = BufferedRequest(headers=request.headers, body=request.get_data())
        result = processor.validate_and_parse(request_)
        if result.is_failure:
            return "", http_status_for(result)
        handle(result.data["order"])
        return "", 200
"""

from __future__ import annotations

import contextlib
import json
from decimal import Decimal, DecimalException
from enum import Enum
from typing import Any

from payu_pl.core.config import get_config
from payu_pl.errors import (
    ConfigurationError,
    PayloadParseError,
    SignatureVerificationError,
    WebhookError,
)
from payu_pl.webhooks.request import SIGNATURE_HEADER, RawRequest, as_raw_request
from payu_pl.webhooks.result import Result
from payu_pl.webhooks.verifier import SignatureVerifier, VerificationResult

CENTS = Decimal("0.01")


class OrderStatus(str, Enum):
    """Order statuses PayU reports in notifications."""

    NEW = "NEW"
    PENDING = "PENDING"
    WAITING_FOR_CONFIRMATION = "WAITING_FOR_CONFIRMATION"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> OrderStatus | Any:
        """Return the enum member, or the raw value for statuses not listed here."""
        if not isinstance(value, str):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


def format_minor_units(amount: str | int | None) -> str | None:
    """Format minor units as a decimal string: ``"21000"`` -> ``"210.00"``.

    Returns None for anything that is not a finite amount representable
    with two decimal places.
    """
    if amount is None:
        return None
    try:
        value = Decimal(str(amount))
        if not value.is_finite():
            return None
        return str((value / 100).quantize(CENTS))
    except DecimalException:
        return None


def order_summary(payload: Any) -> dict[str, Any]:
    """Project the commonly used ``order`` fields out of a notification."""
    order = payload.get("order") if isinstance(payload, dict) else None
    if not isinstance(order, dict):
        order = {}
    return {
        "order_id": order.get("orderId"),
        "ext_order_id": order.get("extOrderId"),
        "status": OrderStatus.parse(order.get("status")),
        "total_amount": order.get("totalAmount"),
        "currency_code": order.get("currencyCode"),
        "amount": format_minor_units(order.get("totalAmount")),
    }


def http_status_for(outcome: Result[Any] | BaseException) -> int:
    """HTTP status a webhook endpoint should answer with.

    Rejected notifications get 400 so PayU does not treat them as a server
    fault. Any other exception gets 500 so PayU retries the delivery.
    """
    if isinstance(outcome, Result):
        return 200 if outcome.is_success else 400
    if isinstance(outcome, WebhookError):
        return 400
    return 500


class WebhookProcessor:
    """Verifies and parses PayU notifications.

    Args:
        secret: The PayU second key. Falls back to ``PAYU_SECOND_KEY``.
        logger: Optional structlog-style logger for diagnostic events.
        verifier: Signature verifier; a shared stateless one by default.

    Raises:
        ConfigurationError: If no secret is available.
    """

    def __init__(
        self,
        secret: str | None = None,
        logger: Any = None,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        resolved = secret if secret is not None else get_config().second_key
        if not resolved:
            raise ConfigurationError(
                "PayU second_key not configured. Pass secret= or set PAYU_SECOND_KEY"
            )
        self.secret = resolved
        self.logger = logger
        self.verifier = verifier or SignatureVerifier()

    def validate_and_parse(self, request: RawRequest, secret: str | None = None) -> Result[Any]:
        """Verify the signature and parse the payload.

        Returns:
            ``Result.success(payload)`` or ``Result.failure(message)``.
        """
        request = as_raw_request(request)
        self._emit("info", "PayU webhook validation started")

        outcome = self._verify(request, secret)
        if not outcome:
            self._emit("error", "PayU webhook rejected", status=outcome.status.value, error=outcome.error)
            return Result.failure(outcome.error or "Signature verification failed")

        self._emit("info", "PayU webhook signature verified", algorithm=outcome.algorithm)

        result = self._decode(request)
        if result.is_failure:
            self._emit("error", "PayU webhook payload rejected", error=result.error)
            return result

        self._emit_payload(result.data)
        return result

    def verify_signature(self, request: RawRequest, secret: str | None = None) -> bool:
        """Verify the signature only.

        Returns:
            True when the signature matches.

        Raises:
            SignatureVerificationError: On any verification failure; the
                exception's ``status`` tells which.
        """
        outcome = self._verify(as_raw_request(request), secret)
        if not outcome:
            raise SignatureVerificationError(outcome.error or "Signature verification failed", outcome.status)
        return True

    def parse_payload(self, request: RawRequest) -> Any:
        """Parse the body as JSON without verifying the signature.

        Raises:
            PayloadParseError: If the body is not valid UTF-8 JSON.
        """
        result = self._decode(as_raw_request(request))
        if result.is_failure:
            raise PayloadParseError(result.error)
        return result.data

    def _verify(self, request: RawRequest, secret: str | None) -> VerificationResult:
        header = request.header(SIGNATURE_HEADER)
        self._emit("info", "PayU signature header", header=header)

        outcome = self.verifier.verify(
            secret if secret is not None else self.secret, request.body(), header
        )

        self._emit(
            "debug",
            "PayU signature comparison",
            algorithm=outcome.algorithm,
            received=outcome.received,
            expected=list(outcome.expected),
            match=outcome.valid,
        )
        return outcome

    def _decode(self, request: RawRequest) -> Result[Any]:
        body = request.body()
        self._emit("debug", "PayU raw payload", payload=body.decode("utf-8", errors="replace"))
        try:
            return Result.success(json.loads(body.decode("utf-8")))
        except (ValueError, RecursionError) as e:
            return Result.failure(f"Failed to parse webhook payload: {e}")

    def _emit_payload(self, payload: Any) -> None:
        if self.logger is None:
            return
        with contextlib.suppress(Exception):
            summary = order_summary(payload)
            self.logger.info(
                "PayU webhook payload parsed",
                order_id=summary["order_id"],
                status=summary["status"],
                amount=summary["amount"],
                currency=summary["currency_code"],
            )

    def _emit(self, level: str, event: str, **context: Any) -> None:
        if self.logger is None:
            return
        with contextlib.suppress(Exception):
            getattr(self.logger, level)(event, **context)


def validate_and_parse(
    request: RawRequest,
    secret: str | None = None,
    logger: Any = None,
) -> Result[Any]:
    """Shortcut for ``WebhookProcessor(secret, logger).validate_and_parse(request)``."""
    return WebhookProcessor(secret=secret, logger=logger).validate_and_parse(request)
