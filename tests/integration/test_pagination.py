"""Integration tests for paged listing of active products."""

from decimal import Decimal

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


@pytest.fixture()
def catalog(make_product):
    return [
        make_product(name=f"Product {i:02d}", price=Decimal(i))
        for i in range(1, 13)
    ]


class TestPageEnvelope:
    def test_default_page(self, auth_client, catalog, settings):
        settings.DEFAULT_PAGE_SIZE = 10
        response = auth_client.get(URL)

        assert response.status_code == 200
        body = response.data
        assert set(body) == {"content", "totalElements", "totalPages", "number", "size"}
        assert body["totalElements"] == 12
        assert body["totalPages"] == 2
        assert body["number"] == 0
        assert body["size"] == 10
        assert [p["id"] for p in body["content"]] == [p.id for p in catalog[:10]]

    def test_second_page(self, auth_client, catalog):
        response = auth_client.get(URL, {"page": 1, "size": 5})
        assert response.data["number"] == 1
        assert [p["name"] for p in response.data["content"]] == [
            f"Product {i:02d}" for i in range(6, 11)
        ]

    def test_page_past_the_end_is_empty(self, auth_client, catalog):
        response = auth_client.get(URL, {"page": 10, "size": 5})
        assert response.status_code == 200
        assert response.data["content"] == []
        assert response.data["totalElements"] == 12
        assert response.data["totalPages"] == 3

    def test_huge_page_index_is_empty(self, auth_client, make_product):
        make_product()
        response = auth_client.get(URL, {"page": str(10**20)})
        assert response.status_code == 200
        assert response.data["content"] == []
        assert response.data["totalElements"] == 1

    def test_empty_store(self, auth_client):
        response = auth_client.get(URL)
        assert response.data["content"] == []
        assert response.data["totalElements"] == 0
        assert response.data["totalPages"] == 0

    def test_size_is_capped(self, auth_client, catalog, settings):
        settings.MAX_PAGE_SIZE = 3
        response = auth_client.get(URL, {"size": 50})
        assert response.data["size"] == 3
        assert len(response.data["content"]) == 3


class TestSorting:
    def test_sort_desc(self, auth_client, catalog):
        response = auth_client.get(URL, {"sort": "price,desc", "size": 3})
        assert [p["price"] for p in response.data["content"]] == ["12.00", "11.00", "10.00"]

    def test_repeated_sort_params(self, auth_client, make_product):
        a = make_product(name="Same", price=Decimal("5.00"))
        b = make_product(name="Same", price=Decimal("1.00"))
        c = make_product(name="Alpha", price=Decimal("9.00"))

        response = auth_client.get(f"{URL}?sort=name,asc&sort=price,asc")

        assert [p["id"] for p in response.data["content"]] == [c.id, b.id, a.id]

    def test_camel_case_sort_field(self, auth_client, catalog):
        response = auth_client.get(URL, {"sort": "createdAt,desc", "size": 1})
        assert response.status_code == 200
        assert response.data["content"][0]["id"] == catalog[-1].id


class TestInvalidParameters:
    @pytest.mark.parametrize(
        "params",
        [
            {"page": "-1"},
            {"page": "abc"},
            {"size": "0"},
            {"sort": "password,asc"},
            {"sort": "name,sideways"},
        ],
    )
    def test_rejected(self, auth_client, params):
        response = auth_client.get(URL, params)
        assert response.status_code == 400
        assert response.data["type"] == "invalid_argument"
