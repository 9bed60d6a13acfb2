"""Payout and shop operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from payu_pl import endpoints
from payu_pl.contracts import PayoutCreateContract
from payu_pl.operations.base import Operation


class CreatePayout(Operation):
    def __call__(self, payout: Mapping[str, Any]) -> Any:
        self.validate_contract(PayoutCreateContract, {"payload": payout}, input=payout)
        # PayU accepts several payout schemas; the payload is forwarded as given.
        return self.transport.request("post", endpoints.PAYOUTS, json=dict(payout))


class RetrievePayout(Operation):
    def __call__(self, payout_id: str) -> Any:
        self.validate_ids(payout_id=payout_id)
        return self.transport.request("get", endpoints.payout(payout_id))


class RetrieveShop(Operation):
    def __call__(self, shop_id: str) -> Any:
        self.validate_ids(shop_id=shop_id)
        return self.transport.request("get", endpoints.shop(shop_id))
