"""Order operations: create, retrieve, capture, cancel, transactions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from payu_pl import endpoints
from payu_pl.contracts import CaptureContract, OrderCreateContract
from payu_pl.operations.base import Operation


class CreateOrder(Operation):
    def __call__(self, order: Mapping[str, Any]) -> Any:
        self.validate_contract(OrderCreateContract, order)
        # Send the caller's payload, not the validated model: unknown keys must survive.
        return self.transport.request("post", endpoints.ORDERS, json=dict(order))


class RetrieveOrder(Operation):
    def __call__(self, order_id: str) -> Any:
        self.validate_ids(order_id=order_id)
        return self.transport.request("get", endpoints.order(order_id))


class CaptureOrder(Operation):
    """Capture a ``WAITING_FOR_CONFIRMATION`` order.

    Without amount and currency the whole order is captured and the
    request body is empty.
    """

    def __call__(self, order_id: str, amount: str | None = None, currency_code: str | None = None) -> Any:
        params = {
            "order_id": "" if order_id is None else str(order_id),
            "amount": amount,
            "currency_code": currency_code,
        }
        self.validate_contract(CaptureContract, params)

        path = endpoints.order_captures(order_id)
        if amount is None and currency_code is None:
            return self.transport.request("post", path, json=None)

        payload = {"amount": amount, "currencyCode": currency_code}
        return self.transport.request("post", path, json={k: v for k, v in payload.items() if v is not None})


class CancelOrder(Operation):
    def __call__(self, order_id: str) -> Any:
        self.validate_ids(order_id=order_id)
        return self.transport.request("delete", endpoints.order(order_id), json=None)


class RetrieveTransactions(Operation):
    def __call__(self, order_id: str) -> Any:
        self.validate_ids(order_id=order_id)
        return self.transport.request("get", endpoints.order_transactions(order_id))
