"""Explicit success/failure values for transport calls."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

import httpx

T = TypeVar("T")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A completed call carrying its value."""

    value: T

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """
        Transform the value.

        A ValueError raised by ``fn`` (bad JSON, pydantic ValidationError)
        turns the result into a Failure.
        """
        try:
            return Success(fn(self.value))
        except ValueError as exc:
            return Failure(exc)

    def tap(self, fn: Callable[[T], Any]) -> Success[T]:
        fn(self.value)
        return self

    def unwrap_or_else(self, fn: Callable[[Failure], F]) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed call carrying the raised error."""

    error: Exception

    @property
    def message(self) -> str:
        if isinstance(self.error, httpx.HTTPStatusError):
            response = self.error.response
            return (
                f"Http failure response for {self.error.request.url}: "
                f"{response.status_code} {response.reason_phrase}"
            )
        return str(self.error) or type(self.error).__name__

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def tap(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def unwrap_or_else(self, fn: Callable[[Failure], F]) -> F:
        return fn(self)


Result = Union[Success[T], Failure]
