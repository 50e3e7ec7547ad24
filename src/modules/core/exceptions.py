"""Error taxonomy shared by every module.

Domain exceptions are raised inside the Service Layer (rules, guards,
repositories) and converted into tagged ``ServiceError`` results before
they reach the API layer.  ``ErrorKind`` is transport-agnostic; the HTTP
status for each kind lives in ``modules.core.exception_handler``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable


class ErrorKind(StrEnum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base class for errors that carry an ``ErrorKind``.

    ``messages`` holds one entry per problem (e.g. one per invalid field);
    ``str(exc)`` joins them.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str | Iterable[str]) -> None:
        if isinstance(message, str):
            self.messages: tuple[str, ...] = (message,)
        else:
            self.messages = tuple(message)
        super().__init__("; ".join(self.messages))


class InvalidArgument(DomainError):
    """Malformed, missing or out-of-range input."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(DomainError):
    """The referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class Conflict(DomainError):
    """A uniqueness or integrity rule was violated by the store."""

    kind = ErrorKind.CONFLICT
