"""Validation contracts for outbound API requests.

Each contract is a pydantic model. ``Contract.check`` returns a mapping of
field name to localized messages (empty when the input is valid). Unknown
keys are allowed: PayU accepts many optional fields and the SDK forwards
the caller's payload untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from payu_pl.core.i18n import translate

IPV4_SEGMENT = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"
IPV4_RE = re.compile(rf"{IPV4_SEGMENT}(?:\.{IPV4_SEGMENT}){{3}}")
# Simplified; the API accepts every IPv6 notation.
IPV6_RE = re.compile(r"[0-9a-fA-F:]+")
CURRENCY_RE = re.compile(r"[A-Z]{3}")
DIGITS_RE = re.compile(r"\d+")

# pydantic error types that have a catalogue entry
_BUILTIN_MESSAGES = {
    "missing": "missing",
    "string_type": "string",
    "dict_type": "hash",
    "list_type": "array",
    "model_type": "hash",
}


def _fail(key: str, **params: Any) -> PydanticCustomError:
    return PydanticCustomError(key, translate(key, **params))


def _filled(value: str) -> str:
    if not value:
        raise _fail("filled")
    return value


def _numeric(value: str) -> str:
    if not DIGITS_RE.fullmatch(value):
        raise _fail("numeric_string")
    return value


def _currency(value: str) -> str:
    if not CURRENCY_RE.fullmatch(value):
        raise _fail("iso_4217")
    return value


def _ip_address(value: str) -> str:
    if not (IPV4_RE.fullmatch(value) or IPV6_RE.fullmatch(value)):
        raise _fail("ip_address")
    return value


def max_length(limit: int) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > limit:
            raise _fail("max_length", max=limit)
        return value

    return AfterValidator(check)


Filled = Annotated[str, AfterValidator(_filled)]
NumericString = Annotated[Filled, AfterValidator(_numeric)]
CurrencyCode = Annotated[Filled, AfterValidator(_currency)]


def errors_from(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic error into ``{"field.path": [messages]}``."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "base"
        key = _BUILTIN_MESSAGES.get(error["type"])
        message = translate(key) if key else error["msg"]
        errors.setdefault(field, []).append(message)
    return errors


class Contract(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @classmethod
    def check(cls, params: Mapping[str, Any]) -> dict[str, list[str]]:
        """Validate ``params``; return an empty dict when they are valid."""
        try:
            model = cls.model_validate(dict(params))
        except PydanticValidationError as e:
            return errors_from(e)
        return model.rule_errors()

    def rule_errors(self) -> dict[str, list[str]]:
        """Cross-field rules evaluated after the schema passed."""
        return {}


class IdContract(Contract):
    id: Filled


class Product(Contract):
    name: Filled
    unit_price: NumericString = Field(alias="unitPrice")
    quantity: NumericString


def _non_empty_products(value: list[Product]) -> list[Product]:
    if not value:
        raise _fail("min_items", min=1)
    return value


class OrderCreateContract(Contract):
    continue_url: Annotated[Filled, max_length(1024)] | None = Field(default=None, alias="continueUrl")
    notify_url: Annotated[Filled, max_length(1024)] | None = Field(default=None, alias="notifyUrl")

    customer_ip: Annotated[Filled, AfterValidator(_ip_address)] = Field(alias="customerIp")
    merchant_pos_id: Filled = Field(alias="merchantPosId")
    description: Annotated[Filled, max_length(4000)]

    additional_description: Annotated[Filled, max_length(1024)] | None = Field(
        default=None, alias="additionalDescription"
    )
    visible_description: Annotated[Filled, max_length(80)] | None = Field(default=None, alias="visibleDescription")
    statement_description: Annotated[Filled, max_length(22)] | None = Field(
        default=None, alias="statementDescription"
    )
    ext_order_id: Annotated[Filled, max_length(1024)] | None = Field(default=None, alias="extOrderId")

    # Amounts are strings of minor units ("21000" == 210.00).
    currency_code: CurrencyCode = Field(alias="currencyCode")
    total_amount: NumericString = Field(alias="totalAmount")

    products: Annotated[list[Product], AfterValidator(_non_empty_products)]


class CaptureContract(Contract):
    order_id: Filled
    amount: str | None = None
    currency_code: str | None = None

    def rule_errors(self) -> dict[str, list[str]]:
        if self.amount is None and self.currency_code is None:
            return {}

        errors: dict[str, list[str]] = {}
        if not self.amount:
            errors.setdefault("amount", []).append(translate("required_with_currency_code"))

        if not self.currency_code:
            errors.setdefault("currency_code", []).append(translate("required_with_amount"))
        elif not CURRENCY_RE.fullmatch(self.currency_code):
            errors.setdefault("currency_code", []).append(translate("iso_4217"))

        if not DIGITS_RE.fullmatch(self.amount or ""):
            errors.setdefault("amount", []).append(translate("numeric_string"))
        return errors


class RefundCreateContract(Contract):
    order_id: Filled
    description: Annotated[Filled, max_length(4000)]
    amount: NumericString | None = None
    ext_refund_id: Annotated[str, max_length(1024)] | None = None


def _payout_payload(value: Any) -> Any:
    if value is None:
        raise _fail("filled")
    if not isinstance(value, Mapping):
        raise _fail("hash")
    if not value:
        raise _fail("min_items", min=1)
    return value


class PayoutCreateContract(Contract):
    payload: Annotated[Any, AfterValidator(_payout_payload)] = Field(default=None, validate_default=True)
