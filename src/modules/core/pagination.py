"""Offset pagination primitives shared by repositories and views.

- ``SortOrder``: one ``field,direction`` ordering instruction.
- ``PageRequest``: zero-based page index, page size and sort orders.
- ``Page``: one page of results plus total-count metadata.

Pages past the last one are empty, never an error.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import InvalidArgument

T = TypeVar("T")
U = TypeVar("U")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC

    def as_ordering(self) -> str:
        """Django ``order_by`` expression for this sort order."""
        prefix = "-" if self.direction is SortDirection.DESC else ""
        return f"{prefix}{self.field}"

    @classmethod
    def parse(cls, raw: str, sortable_fields: Iterable[str]) -> SortOrder:
        """Parse ``"field"`` or ``"field,asc|desc"``.

        camelCase names are accepted and mapped to snake_case
        (``createdAt`` -> ``created_at``).

        Raises:
            InvalidArgument: unknown field or direction.
        """
        parts = [part.strip() for part in raw.split(",")]
        if not parts[0] or len(parts) > 2:
            raise InvalidArgument(f"sort: invalid sort expression '{raw}'.")

        name = _CAMEL_BOUNDARY.sub("_", parts[0]).lower()
        allowed = set(sortable_fields)
        if name not in allowed:
            raise InvalidArgument(
                f"sort: unknown field '{parts[0]}' "
                f"(allowed: {', '.join(sorted(allowed))})."
            )

        direction = SortDirection.ASC
        if len(parts) == 2 and parts[1]:
            try:
                direction = SortDirection(parts[1].lower())
            except ValueError as exc:
                raise InvalidArgument(
                    f"sort: direction must be 'asc' or 'desc', got '{parts[1]}'."
                ) from exc
        return cls(field=name, direction=direction)


class PageRequest(BaseModel):
    """Immutable page request (zero-based ``page``)."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, gt=0)
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size

    def ordering(self, default: str = "id") -> list[str]:
        """``order_by`` arguments, with ``default`` as a stable tie-breaker."""
        ordering = [order.as_ordering() for order in self.sort]
        if default not in {order.field for order in self.sort}:
            ordering.append(default)
        return ordering

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any],
        sortable_fields: Iterable[str],
        default_size: int | None = None,
    ) -> PageRequest:
        """Build a page request from HTTP query parameters.

        ``params`` may be a Django ``QueryDict``, in which case every
        ``sort`` value is honoured in order.

        Raises:
            InvalidArgument: malformed page / size / sort values.
        """
        if default_size is None:
            default_size = settings.DEFAULT_PAGE_SIZE
        max_size = settings.MAX_PAGE_SIZE

        page = _parse_int(params.get("page"), "page", default=0)
        size = _parse_int(params.get("size"), "size", default=default_size)
        if size > max_size:
            size = max_size

        if hasattr(params, "getlist"):
            raw_sorts = params.getlist("sort")
        else:
            raw = params.get("sort")
            raw_sorts = [raw] if raw else []
        fields = tuple(sortable_fields)
        sort = tuple(SortOrder.parse(raw, fields) for raw in raw_sorts if raw)

        try:
            return cls(page=page, size=size, sort=sort)
        except PydanticValidationError as exc:
            raise InvalidArgument(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            ) from exc


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name}: must be an integer, got '{raw}'.") from exc


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results with total-count metadata."""

    content: list[T]
    total_elements: int
    number: int
    size: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        pages = math.ceil(self.total_elements / self.size) if self.size else 0
        object.__setattr__(self, "total_pages", pages)

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        return Page(
            content=[fn(item) for item in self.content],
            total_elements=self.total_elements,
            number=self.number,
            size=self.size,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase metadata)."""
        return {
            "content": list(self.content),
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
            "number": self.number,
            "size": self.size,
        }
