"""Shared plumbing for REST operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from payu_pl.contracts import Contract, IdContract
from payu_pl.errors import ValidationError

if TYPE_CHECKING:
    from payu_pl.client import Client
    from payu_pl.transport import Transport


class Operation:
    """One API call. Subclasses implement ``__call__``."""

    def __init__(self, client: Client) -> None:
        self.client = client

    @property
    def transport(self) -> Transport:
        return self.client.transport

    def validate_contract(
        self,
        contract: type[Contract],
        params: Mapping[str, Any],
        input: Any = None,
    ) -> None:
        errors = contract.check(params)
        if errors:
            raise ValidationError(errors=errors, input=params if input is None else input)

    def validate_ids(self, **ids: Any) -> None:
        """Validate every id; all failures are reported under their own key."""
        errors: dict[str, list[str]] = {}
        for key, value in ids.items():
            result = IdContract.check({"id": "" if value is None else str(value)})
            if result:
                errors[key] = result["id"]
        if errors:
            raise ValidationError(errors=errors, input=ids)
