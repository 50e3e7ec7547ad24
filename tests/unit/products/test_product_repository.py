"""Unit tests for ProductDjangoRepository.

Covers:
- get_by_id / get_for_update (soft-deleted rows included).
- save: validation through full_clean, create and update.
- find_active_paged: soft-delete filtering, paging, sorting, filters.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from modules.core.exceptions import InvalidArgument
from modules.core.pagination import PageRequest, SortDirection, SortOrder
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# get_by_id / get_for_update
# ===========================================================================


class TestGetById:
    def test_returns_product_when_found(self, repo, make_product):
        product = make_product()
        result = repo.get_by_id(product.id)
        assert result is not None
        assert result.id == product.id

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_id(999) is None

    def test_returns_soft_deleted_product(self, repo, make_product):
        product = make_product(deleted=True)
        result = repo.get_by_id(product.id)
        assert result is not None
        assert result.deleted is True

    def test_get_for_update_returns_product(self, repo, make_product):
        product = make_product()
        assert repo.get_for_update(product.id) == product

    def test_get_for_update_returns_none_when_not_found(self, repo):
        assert repo.get_for_update(999) is None


# ===========================================================================
# save
# ===========================================================================


class TestSave:
    def test_creates_new_product(self, repo):
        product = Product(name="Keyboard", price=Decimal("99.90"))
        saved = repo.save(product)
        assert saved is product
        assert saved.id is not None
        assert saved.created_at is not None
        assert Product.objects.filter(id=saved.id).exists()

    def test_updates_existing_product(self, repo, make_product):
        product = make_product()
        product.name = "Updated Name"
        repo.save(product)
        product.refresh_from_db()
        assert product.name == "Updated Name"

    def test_rejects_short_name(self, repo):
        with pytest.raises(ValidationError) as exc_info:
            repo.save(Product(name="A", price=Decimal("1.00")))
        assert "name" in exc_info.value.message_dict

    def test_rejects_too_many_integer_digits(self, repo):
        with pytest.raises(ValidationError) as exc_info:
            repo.save(Product(name="Yacht", price=Decimal("12345678901.00")))
        assert "price" in exc_info.value.message_dict

    def test_rejects_too_many_fraction_digits(self, repo):
        with pytest.raises(ValidationError):
            repo.save(Product(name="Gum", price=Decimal("1.005")))

    def test_rejects_long_description(self, repo):
        with pytest.raises(ValidationError):
            repo.save(Product(name="Book", price=Decimal("1.00"), description="x" * 501))

    def test_accepts_max_price(self, repo):
        saved = repo.save(Product(name="Jet", price=Decimal("9999999999.99")))
        saved.refresh_from_db()
        assert saved.price == Decimal("9999999999.99")


# ===========================================================================
# find_active_paged
# ===========================================================================


class TestFindActivePaged:
    def test_excludes_soft_deleted(self, repo, make_product):
        alive = make_product(name="Alive")
        make_product(name="Gone", deleted=True)

        page = repo.find_active_paged(PageRequest())

        assert [p.id for p in page.content] == [alive.id]
        assert page.total_elements == 1

    def test_pages_with_metadata(self, repo, make_product):
        for idx in range(5):
            make_product(name=f"Product {idx}")

        page = repo.find_active_paged(PageRequest(page=1, size=2))

        assert [p.name for p in page.content] == ["Product 2", "Product 3"]
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.number == 1
        assert page.size == 2

    def test_page_past_the_end_is_empty(self, repo, make_product):
        make_product()
        page = repo.find_active_paged(PageRequest(page=5, size=10))
        assert page.content == []
        assert page.total_elements == 1

    def test_huge_page_index_is_empty(self, repo, make_product):
        make_product()
        page = repo.find_active_paged(PageRequest(page=10**20, size=10))
        assert page.content == []
        assert page.total_elements == 1
        assert page.number == 10**20

    def test_sorts_by_price_desc(self, repo, make_product):
        make_product(name="Cheap", price=Decimal("1.00"))
        make_product(name="Pricey", price=Decimal("100.00"))
        make_product(name="Middle", price=Decimal("50.00"))

        page = repo.find_active_paged(
            PageRequest(sort=(SortOrder(field="price", direction=SortDirection.DESC),))
        )

        assert [p.name for p in page.content] == ["Pricey", "Middle", "Cheap"]

    def test_unknown_sort_field_rejected(self, repo):
        with pytest.raises(InvalidArgument, match="sort"):
            repo.find_active_paged(PageRequest(sort=(SortOrder(field="deleted"),)))

    def test_filters_by_name(self, repo, make_product):
        make_product(name="Gamer Mouse")
        make_product(name="Keyboard")

        page = repo.find_active_paged(PageRequest(), {"name": "mouse"})

        assert [p.name for p in page.content] == ["Gamer Mouse"]

    def test_filters_by_price_range(self, repo, make_product):
        make_product(name="Cheap", price=Decimal("5.00"))
        make_product(name="Mid", price=Decimal("50.00"))
        make_product(name="Pricey", price=Decimal("500.00"))

        page = repo.find_active_paged(
            PageRequest(), {"min_price": "10", "max_price": "100"}
        )

        assert [p.name for p in page.content] == ["Mid"]

    def test_invalid_filter_value_rejected(self, repo):
        with pytest.raises(InvalidArgument, match="min_price"):
            repo.find_active_paged(PageRequest(), {"min_price": "cheap"})
