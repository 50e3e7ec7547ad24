"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (views) and the
Service layer.  DTOs are immutable (``frozen=True``).

DTOs check *shape* only (types, lengths, decimal digits).  Business
rules such as "name must not be blank" or "price must be positive"
live in ``modules.products.rules`` so that they apply to every caller.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.products.models import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``name`` and ``price`` are optional at this level so that a missing
    value is reported by the rules module as an invalid argument.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = Field(
        default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    )
    price: Optional[Decimal] = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied (non-null) fields are merged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = Field(
        default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH
    )
    price: Optional[Decimal] = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
