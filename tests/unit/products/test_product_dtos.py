"""Unit tests for Product DTOs.

DTOs validate shape only; business rules are covered by the rules tests.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_valid_data(self):
        dto = CreateProductDTO(name="Mouse", price="49.90", description="Gamer")
        assert dto.name == "Mouse"
        assert dto.price == Decimal("49.90")
        assert dto.description == "Gamer"

    def test_everything_optional_at_shape_level(self):
        dto = CreateProductDTO()
        assert dto.name is None
        assert dto.price is None
        assert dto.description is None

    def test_frozen(self):
        dto = CreateProductDTO(name="Mouse", price=Decimal("1"))
        with pytest.raises(ValidationError):
            dto.name = "Other"

    def test_ignores_unknown_fields(self):
        dto = CreateProductDTO.model_validate(
            {"name": "Mouse", "price": "1.00", "deleted": True, "id": 5}
        )
        assert not hasattr(dto, "deleted")

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "M", "price": "1.00"},
            {"name": "x" * 101, "price": "1.00"},
            {"name": "Mouse", "price": "1.001"},
            {"name": "Mouse", "price": "12345678901"},
            {"name": "Mouse", "price": "not-a-number"},
            {"name": "Mouse", "price": "1.00", "description": "d" * 501},
        ],
    )
    def test_shape_violations(self, payload):
        with pytest.raises(ValidationError):
            CreateProductDTO.model_validate(payload)


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert (dto.name, dto.price, dto.description) == (None, None, None)

    def test_partial(self):
        dto = UpdateProductDTO(price="10.00")
        assert dto.price == Decimal("10.00")
        assert dto.name is None

    def test_empty_description_allowed(self):
        assert UpdateProductDTO(description="").description == ""

    def test_too_many_fraction_digits(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(price="10.999")
