"""Validation message catalogue.

Messages are looked up in the locale from the global settings unless one
is passed explicitly. Unknown locales fall back to English.
"""

from __future__ import annotations

from payu_pl.core.config import get_config

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "missing": "is missing",
        "filled": "must be filled",
        "string": "must be a string",
        "array": "must be an array",
        "hash": "must be a hash",
        "numeric_string": "must be a numeric string",
        "iso_4217": "must be a 3-letter ISO 4217 currency code",
        "ip_address": "must be a valid IPv4 or IPv6 address",
        "max_length": "size cannot be greater than {max}",
        "min_items": "must contain at least {min} item(s)",
        "required_with_amount": "is required when amount is provided",
        "required_with_currency_code": "is required when currency_code is provided",
    },
    "pl": {
        "missing": "jest wymagane",
        "filled": "musi być wypełnione",
        "string": "musi być ciągiem znaków",
        "array": "musi być tablicą",
        "hash": "musi być obiektem",
        "numeric_string": "musi być ciągiem cyfr",
        "iso_4217": "musi być 3-literowym kodem waluty ISO 4217",
        "ip_address": "musi być poprawnym adresem IPv4 lub IPv6",
        "max_length": "długość nie może przekraczać {max}",
        "min_items": "musi zawierać co najmniej {min} element(y)",
        "required_with_amount": "jest wymagane, gdy podano amount",
        "required_with_currency_code": "jest wymagane, gdy podano currency_code",
    },
}


def available_locales() -> list[str]:
    return sorted(MESSAGES)


def translate(key: str, locale: str | None = None, **params: object) -> str:
    """Return the message for ``key`` formatted with ``params``.

    Args:
        key: Message key, e.g. ``"numeric_string"``.
        locale: Locale override; defaults to the configured locale.
        **params: Placeholder values such as ``max`` or ``min``.
    """
    locale = locale or get_config().locale
    catalogue = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    template = catalogue.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
    return template.format(**params)
