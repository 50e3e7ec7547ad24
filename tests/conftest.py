from decimal import Decimal

import pytest
from django.conf import settings

from rest_framework.test import APIClient

from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient without credentials."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient sending the configured API key on every request."""
    client = APIClient()
    client.credentials(**{"HTTP_X_API_KEY": settings.API_KEY})
    return client


@pytest.fixture()
def make_product():
    """Factory persisting a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Widget",
            "price": Decimal("19.99"),
            "description": "A fine widget",
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
