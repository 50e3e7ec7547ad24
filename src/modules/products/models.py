"""Product model with soft delete.

Field rules:
- ``name``: 2-100 characters (blank-after-trim is rejected by the rules module).
- ``price``: greater than zero, at most 10 integer and 2 fractional digits.
- ``description``: optional, at most 500 characters; ``None`` means absent.
- ``deleted``: soft-delete flag inherited from ``SoftDeleteModel``.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PRICE_MAX_DIGITS = 12
PRICE_DECIMAL_PLACES = 2


class Product(SoftDeleteModel):
    """Product aggregate root.

    ``id``, ``created_at`` and ``updated_at`` are assigned by the store.
    """

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
    )
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    description = models.CharField(  # noqa: DJ01
        max_length=DESCRIPTION_MAX_LENGTH,
        null=True,
        blank=True,
        default=None,
    )

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
