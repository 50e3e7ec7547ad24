"""Explicit success / failure values returned by application services.

Services never let exceptions cross their boundary: each use case returns
a ``Result`` holding either the success value or exactly one
``ServiceError``.  Views inspect ``result.ok`` and render accordingly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from modules.core.exceptions import DomainError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError:
    """A tagged, immutable error description."""

    kind: ErrorKind
    messages: tuple[str, ...]

    @classmethod
    def of(cls, kind: ErrorKind, messages: str | Iterable[str]) -> ServiceError:
        if isinstance(messages, str):
            return cls(kind=kind, messages=(messages,))
        return cls(kind=kind, messages=tuple(messages))

    @classmethod
    def from_exception(cls, exc: DomainError) -> ServiceError:
        return cls(kind=exc.kind, messages=exc.messages)

    @property
    def message(self) -> str:
        return "; ".join(self.messages)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation.

    ``value`` may legitimately be ``None`` on success (e.g. a lookup that
    found nothing, or a command with no return value).
    """

    value: T | None = None
    error: ServiceError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls, kind: ErrorKind, messages: str | Iterable[str]
    ) -> Result[T]:
        return cls(error=ServiceError.of(kind, messages))

    @classmethod
    def from_exception(cls, exc: DomainError) -> Result[T]:
        return cls(error=ServiceError.from_exception(exc))

    @property
    def ok(self) -> bool:
        return self.error is None
