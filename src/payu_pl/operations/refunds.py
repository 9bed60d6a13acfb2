"""Refund operations."""

from __future__ import annotations

from typing import Any

from payu_pl import endpoints
from payu_pl.contracts import RefundCreateContract
from payu_pl.operations.base import Operation


class CreateRefund(Operation):
    """Refund an order in full (no amount) or in part."""

    def __call__(
        self,
        order_id: str,
        description: str,
        amount: str | None = None,
        ext_refund_id: str | None = None,
    ) -> Any:
        params = {
            "order_id": "" if order_id is None else str(order_id),
            "description": description,
            "amount": amount,
            "ext_refund_id": ext_refund_id,
        }
        self.validate_contract(RefundCreateContract, params)

        refund = {"description": description, "amount": amount, "extRefundId": ext_refund_id}
        return self.transport.request(
            "post",
            endpoints.order_refunds(order_id),
            json={"refund": {k: v for k, v in refund.items() if v is not None}},
        )


class ListRefunds(Operation):
    def __call__(self, order_id: str) -> Any:
        self.validate_ids(order_id=order_id)
        return self.transport.request("get", endpoints.order_refunds(order_id))


class RetrieveRefund(Operation):
    def __call__(self, order_id: str, refund_id: str) -> Any:
        self.validate_ids(order_id=order_id, refund_id=refund_id)
        return self.transport.request("get", endpoints.order_refund(order_id, refund_id))
