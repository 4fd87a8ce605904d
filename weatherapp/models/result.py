"""Two-variant result returned by every data-fetching operation.

A fetch either succeeds with a payload or fails with an ``ErrorInfo``. Callers
handle both with ``match``::

    match await repo.get_forecast():
        case Success(value=records):
            ...
        case Failure(error=err):
            ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

from weatherapp.models.errors import ErrorInfo

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def value_or_none(self) -> T | None:
        return self.value

    def error_or_none(self) -> ErrorInfo | None:
        return None

    def map(self, transform: Callable[[T], U]) -> "Success[U]":
        return Success(transform(self.value))

    def fold(
        self, on_success: Callable[[T], R], on_failure: Callable[[ErrorInfo], R]
    ) -> R:
        return on_success(self.value)


@dataclass(frozen=True)
class Failure:
    error: ErrorInfo

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def value_or_none(self) -> None:
        return None

    def error_or_none(self) -> ErrorInfo:
        return self.error

    def map(self, transform: Callable) -> "Failure":
        return self

    def fold(
        self, on_success: Callable[..., R], on_failure: Callable[[ErrorInfo], R]
    ) -> R:
        return on_failure(self.error)


Result: TypeAlias = Success[T] | Failure
