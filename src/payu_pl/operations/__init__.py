from payu_pl.operations.authorize import OAuthToken
from payu_pl.operations.base import Operation
from payu_pl.operations.orders import (
    CancelOrder,
    CaptureOrder,
    CreateOrder,
    RetrieveOrder,
    RetrieveTransactions,
)
from payu_pl.operations.payouts import CreatePayout, RetrievePayout, RetrieveShop
from payu_pl.operations.refunds import CreateRefund, ListRefunds, RetrieveRefund
from payu_pl.operations.statements import RetrieveStatement

__all__ = [
    "Operation",
    "OAuthToken",
    # Orders
    "CreateOrder",
    "RetrieveOrder",
    "CaptureOrder",
    "CancelOrder",
    "RetrieveTransactions",
    # Refunds
    "CreateRefund",
    "ListRefunds",
    "RetrieveRefund",
    # Payouts / shops / statements
    "CreatePayout",
    "RetrievePayout",
    "RetrieveShop",
    "RetrieveStatement",
]
