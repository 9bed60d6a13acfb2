"""Uniform success/failure value returned by webhook validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``data`` (success) or ``error`` (failure), never both."""

    data: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            raise ValueError("Result cannot carry both data and error")

    @classmethod
    def success(cls, data: T) -> Result[T]:
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> Result[Any]:
        return cls(error=str(error))

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    def __bool__(self) -> bool:
        return self.is_success
