"""Result type returned by every pipeline stage."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from src.selene_cli.core.enums import ErrorKind

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful stage output."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def and_then(self, func: "Callable[[T], Result[U]]") -> "Result[U]":
        """Feed the value into the next stage."""
        return func(self.value)


@dataclass(frozen=True)
class Err:
    """Failed stage output.

    Attributes:
        kind: Failure classification
        message: Human-readable explanation, safe to show to the user
    """

    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def and_then(self, func: Callable) -> "Err":
        """Short-circuit: later stages never run."""
        return self


Result = Ok[T] | Err
