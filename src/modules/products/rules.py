"""Validation and mutation rules for the Product aggregate.

Pure functions consumed by ``ProductService``: no store access, no
logging.  Every failure raises ``InvalidArgument`` (or a subclass); the
service turns it into a tagged error result.

Update is a *merge*: fields absent (``None``) from the patch are left
untouched on the existing product, never nulled out.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from modules.core.exceptions import InvalidArgument
from modules.products.exceptions import ProductAlreadyDeleted
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _is_positive(price: Optional[Decimal]) -> bool:
    return price is not None and price > 0


def validate_for_create(payload: Optional[CreateProductDTO]) -> None:
    """Reject a null payload, a blank/missing name or a non-positive price."""
    if payload is None:
        raise InvalidArgument("Product data must not be null.")
    if _is_blank(payload.name):
        raise InvalidArgument("name: Product name is required.")
    if not _is_positive(payload.price):
        raise InvalidArgument("price: Product price must be greater than zero.")


def normalize_for_create(payload: CreateProductDTO) -> Product:
    """Build an unsaved ``Product`` from a validated creation payload."""
    description = payload.description
    return Product(
        name=payload.name.strip(),
        price=payload.price,
        description=description.strip() if description is not None else None,
        deleted=False,
    )


def validate_and_merge_for_update(
    existing: Product, patch: Optional[UpdateProductDTO]
) -> Product:
    """Merge the non-null fields of ``patch`` into ``existing``.

    Every supplied field is validated before anything is written, so a
    rejected patch leaves ``existing`` unchanged.
    """
    if patch is None:
        raise InvalidArgument("Product update data is required.")
    if patch.name is not None and _is_blank(patch.name):
        raise InvalidArgument("name: Product name must not be blank.")
    if patch.price is not None and not _is_positive(patch.price):
        raise InvalidArgument("price: Product price must be greater than zero.")

    if patch.name is not None:
        existing.name = patch.name.strip()
    if patch.price is not None:
        existing.price = patch.price
    if patch.description is not None:
        existing.description = patch.description.strip()
    return existing


def guard_not_already_deleted(product: Product) -> None:
    if product.deleted:
        raise ProductAlreadyDeleted(product.id)


def guard_positive_id(id: object) -> None:
    """Reject a missing, non-integer, zero or negative ID."""
    if id is None or isinstance(id, bool) or not isinstance(id, int) or id <= 0:
        raise InvalidArgument("id: Product ID must be a positive integer.")


def mark_deleted(product: Product) -> Product:
    """Flip the soft-delete flag (one-way)."""
    product.deleted = True
    return product
