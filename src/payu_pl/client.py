"""PayU REST API client.

Usage:
    from payu_pl import Client

    with Client(client_id="300746", client_secret="...", environment="sandbox") as client:
        client.oauth_token()
        response = client.create_order({...})
        order = client.retrieve_order(response["orderId"])
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from payu_pl import operations
from payu_pl.core.config import get_config
from payu_pl.transport import Transport, validate_base_url

DEFAULT_PRODUCTION_BASE_URL = "https://secure.payu.com"
DEFAULT_SANDBOX_BASE_URL = "https://secure.snd.payu.com"

BASE_URLS = {
    "production": DEFAULT_PRODUCTION_BASE_URL,
    "sandbox": DEFAULT_SANDBOX_BASE_URL,
}


def default_base_url_for(environment: str) -> str:
    try:
        return BASE_URLS[str(environment).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown environment: {environment!r} (use 'production' or 'sandbox')"
        ) from None


class Client:
    """Facade over the REST operations.

    Holds OAuth credentials, the current access token and the transport.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: str | None = None,
        base_url: str | None = None,
        environment: str = "production",
        open_timeout: float = 10.0,
        read_timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not client_id:
            raise ValueError("client_id is required")
        if not client_secret:
            raise ValueError("client_secret is required")

        self.client_id = str(client_id)
        self.client_secret = str(client_secret)
        self.access_token = access_token
        self.base_url = base_url or default_base_url_for(environment)
        validate_base_url(self.base_url)

        self.transport = Transport(
            base_url=self.base_url,
            access_token_provider=lambda: self.access_token,
            open_timeout=open_timeout,
            read_timeout=read_timeout,
            http_client=http_client,
        )

    @classmethod
    def from_config(cls, **overrides: Any) -> Client:
        """Build a client from ``PAYU_*`` settings; keyword arguments win."""
        config = get_config()
        kwargs: dict[str, Any] = {
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            "environment": config.environment,
            "open_timeout": config.open_timeout,
            "read_timeout": config.read_timeout,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # OAuth

    def oauth_token(self, grant_type: str = "client_credentials") -> dict[str, Any]:
        return operations.OAuthToken(self)(grant_type=grant_type)

    # Orders

    def create_order(self, order: Mapping[str, Any]) -> Any:
        return operations.CreateOrder(self)(order)

    def retrieve_order(self, order_id: str) -> Any:
        return operations.RetrieveOrder(self)(order_id)

    def capture_order(self, order_id: str, amount: str | None = None, currency_code: str | None = None) -> Any:
        return operations.CaptureOrder(self)(order_id, amount=amount, currency_code=currency_code)

    def cancel_order(self, order_id: str) -> Any:
        return operations.CancelOrder(self)(order_id)

    def retrieve_transactions(self, order_id: str) -> Any:
        return operations.RetrieveTransactions(self)(order_id)

    # Refunds

    def create_refund(
        self,
        order_id: str,
        description: str,
        amount: str | None = None,
        ext_refund_id: str | None = None,
    ) -> Any:
        return operations.CreateRefund(self)(
            order_id, description=description, amount=amount, ext_refund_id=ext_refund_id
        )

    def list_refunds(self, order_id: str) -> Any:
        return operations.ListRefunds(self)(order_id)

    def retrieve_refund(self, order_id: str, refund_id: str) -> Any:
        return operations.RetrieveRefund(self)(order_id, refund_id)

    # Shops

    def retrieve_shop(self, shop_id: str) -> Any:
        return operations.RetrieveShop(self)(shop_id)

    # Payouts

    def create_payout(self, payout: Mapping[str, Any]) -> Any:
        return operations.CreatePayout(self)(payout)

    def retrieve_payout(self, payout_id: str) -> Any:
        return operations.RetrievePayout(self)(payout_id)

    # Statements

    def retrieve_statement(self, report_id: str) -> dict[str, Any]:
        return operations.RetrieveStatement(self)(report_id)
