"""Product domain exceptions.

Raised inside the Service Layer when business rules are violated and
converted into tagged ``ServiceError`` results before leaving it.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidArgument, NotFound


class ProductNotFound(NotFound):
    """No product exists with the requested ID."""

    def __init__(self, id: int) -> None:
        self.id = id
        super().__init__(f"No product found with ID: {id}.")


class ProductAlreadyDeleted(InvalidArgument):
    """Soft delete attempted on a product that is already deleted."""

    def __init__(self, id: int | None) -> None:
        self.id = id
        super().__init__(f"Product {id} is already deleted.")
