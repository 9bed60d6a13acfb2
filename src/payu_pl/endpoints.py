"""PayU REST API paths."""

from __future__ import annotations

from urllib.parse import quote_plus

OAUTH_TOKEN = "/pl/standard/user/oauth/authorize"

ORDERS = "/api/v2_1/orders"
SHOPS = "/api/v2_1/shops"
PAYOUTS = "/api/v2_1/payouts"
REPORTS = "/api/v2_1/reports"


def _segment(value: object) -> str:
    return quote_plus(str(value))


def order(order_id: str) -> str:
    return f"{ORDERS}/{_segment(order_id)}"


def order_captures(order_id: str) -> str:
    return f"{order(order_id)}/captures"


def order_transactions(order_id: str) -> str:
    return f"{order(order_id)}/transactions"


def order_refunds(order_id: str) -> str:
    return f"{order(order_id)}/refunds"


def order_refund(order_id: str, refund_id: str) -> str:
    return f"{order_refunds(order_id)}/{_segment(refund_id)}"


def shop(shop_id: str) -> str:
    return f"{SHOPS}/{_segment(shop_id)}"


def payout(payout_id: str) -> str:
    return f"{PAYOUTS}/{_segment(payout_id)}"


def report(report_id: str) -> str:
    return f"{REPORTS}/{_segment(report_id)}"
