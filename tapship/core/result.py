"""Result type for explicit error handling.

Every fallible step of the release flow (running a command, preparing a
directory, packaging a platform, pushing the tap) returns a Result instead
of raising. Callers branch on the variant and pass errors up unchanged.

Usage:
    match package_platform(platform, config=config, manifest=manifest, console=console):
        case Ok(archive):
            console.success(str(archive.path))
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeGuard

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the value, keeping it wrapped."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[object], object]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying an error payload."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raise, since there is no value.

        Raises:
            ValueError: Always, with the error in the message.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map(self, f: Callable[[object], object]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Translate the error payload, e.g. ProcessError -> ReleaseError."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Narrow a Result to Ok for type checkers."""
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Narrow a Result to Err for type checkers."""
    return isinstance(result, Err)
