"""Result type for explicit error handling.

A small Result type in the spirit of Rust's Result<T, E>. Steps that can
fail without it being exceptional (a git query that finds no upstream, an
environment variable that does not parse) return ``Ok`` or ``Err`` instead
of raising.

Usage:
    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Err(f"not a number: {raw}")
        return Ok(int(raw))

    match parse_port("8080"):
        case Ok(port):
            print(port)
        case Err(message):
            print(message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeGuard, TypeVar

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result holding ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Applies ``f`` to the contained value."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chains another fallible step onto this value."""
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result holding ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError with the error.

        Raises:
            ValueError: Always, since Err has no value.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Err[E]:
        """Returns self unchanged; the chain stops at the first error."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard that checks if a Result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard that checks if a Result is Err."""
    return isinstance(result, Err)
