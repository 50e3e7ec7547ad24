"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing entity.  ``save`` lets Django ``ValidationError`` and database
errors propagate to the service, which classifies them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from modules.core.exceptions import InvalidArgument
from modules.core.pagination import Page, PageRequest
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

SORTABLE_FIELDS = ("id", "name", "price", "created_at", "updated_at")


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key, including soft-deleted rows."""
        return Product.objects.filter(id=id).first()

    def get_for_update(self, id: int) -> Optional[Product]:
        """Row-locked look-up; a no-op lock on backends without FOR UPDATE."""
        return Product.objects.select_for_update().filter(id=id).first()

    def save(self, entity: Product) -> Product:
        """Validate field constraints, then persist (create or update)."""
        entity.full_clean()
        entity.save()
        return entity

    def find_active_paged(
        self,
        page_request: PageRequest,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Page[Product]:
        """One page of products with ``deleted = false``.

        Examples of valid filters::

            {"name": "mouse"}
            {"min_price": "10", "max_price": "99.90"}

        Raises:
            InvalidArgument: a sort field outside ``SORTABLE_FIELDS`` or
                an unparseable filter value.
        """
        queryset = Product.objects.alive()

        if filters:
            filterset = ProductFilter(filters, queryset=queryset)
            if not filterset.is_valid():
                raise InvalidArgument(
                    f"{field}: {message}"
                    for field, messages in filterset.errors.items()
                    for message in messages
                )
            queryset = filterset.qs

        unknown = [o.field for o in page_request.sort if o.field not in SORTABLE_FIELDS]
        if unknown:
            raise InvalidArgument(f"sort: unknown field '{name}'." for name in unknown)

        queryset = queryset.order_by(*page_request.ordering())
        total = queryset.count()
        offset = page_request.offset
        # Offsets beyond the row count may overflow the backend's integer range.
        if offset >= total:
            content: list[Product] = []
        else:
            content = list(queryset[offset : offset + page_request.size])
        return Page(
            content=content,
            total_elements=total,
            number=page_request.page,
            size=page_request.size,
        )
