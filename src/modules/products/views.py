"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Request bodies are parsed into Pydantic DTOs; failed service results
are rendered with the standard error body.  Anything unexpected is left
to the global exception handler.
"""

from __future__ import annotations

from typing import Any, Optional

from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from pydantic import ValidationError as PydanticValidationError
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exception_handler import error_response, pydantic_messages
from modules.core.exceptions import ErrorKind, InvalidArgument
from modules.core.pagination import PageRequest
from modules.core.results import ServiceError
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import (
    SORTABLE_FIELDS,
    ProductDjangoRepository,
)
from modules.products.serializers import ProductPageSerializer, ProductSerializer
from modules.products.services import ProductService

_PRODUCT_INPUT = inline_serializer(
    name="ProductInput",
    fields={
        "name": serializers.CharField(min_length=2, max_length=100),
        "price": serializers.DecimalField(max_digits=12, decimal_places=2),
        "description": serializers.CharField(
            max_length=500, required=False, allow_null=True, allow_blank=True
        ),
    },
)

_LIST_PARAMETERS = [
    OpenApiParameter("page", int, description="Zero-based page index.", default=0),
    OpenApiParameter("size", int, description="Page size (max 100)."),
    OpenApiParameter(
        "sort",
        str,
        many=True,
        description="field,asc|desc, e.g. price,desc. Repeatable.",
    ),
    OpenApiParameter("name", str, description="Case-insensitive name fragment."),
    OpenApiParameter(
        "description", str, description="Case-insensitive description fragment."
    ),
    OpenApiParameter("min_price", float, description="Minimum price (inclusive)."),
    OpenApiParameter("max_price", float, description="Maximum price (inclusive)."),
]


def _invalid(request: Request, messages) -> Response:
    return error_response(request, ServiceError.of(ErrorKind.INVALID_ARGUMENT, messages))


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_id(pk: Optional[str]) -> int:
        try:
            return int(pk)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"id: '{pk}' is not a valid product ID.") from exc

    @staticmethod
    def _body(request: Request) -> dict[str, Any]:
        data = request.data
        if not isinstance(data, dict):
            raise InvalidArgument("Request body must be a JSON object.")
        return data

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=_LIST_PARAMETERS,
        responses=ProductPageSerializer,
    )
    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        page_request = PageRequest.from_query_params(
            request.query_params, sortable_fields=SORTABLE_FIELDS
        )
        filters = {
            key: request.query_params[key]
            for key in ProductFilter.base_filters
            if key in request.query_params
        }

        result = self._service.list_products(page_request, filters or None)
        if not result.ok:
            return error_response(request, result.error)

        page = result.value.map(lambda product: ProductSerializer(product).data)
        return Response(page.to_dict())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        result = self._service.get_product(self._parse_id(pk))
        if not result.ok:
            return error_response(request, result.error)
        if result.value is None:
            return error_response(
                request,
                ServiceError.of(ErrorKind.NOT_FOUND, f"No product found with ID: {pk}."),
            )
        return Response(ProductSerializer(result.value).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=_PRODUCT_INPUT, responses={201: ProductSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(self._body(request))
        except PydanticValidationError as exc:
            return _invalid(request, pydantic_messages(exc))

        result = self._service.create_product(dto)
        if not result.ok:
            return error_response(request, result.error)

        return Response(
            ProductSerializer(result.value).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(request=_PRODUCT_INPUT, responses=ProductSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/ (always a partial merge)."""
        id = self._parse_id(pk)
        try:
            dto = UpdateProductDTO.model_validate(self._body(request))
        except PydanticValidationError as exc:
            return _invalid(request, pydantic_messages(exc))

        result = self._service.update_product(id, dto)
        if not result.ok:
            return error_response(request, result.error)

        return Response(ProductSerializer(result.value).data)

    @extend_schema(request=_PRODUCT_INPUT, responses=ProductSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    @extend_schema(responses={204: None})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/ (soft delete)."""
        result = self._service.delete_product(self._parse_id(pk))
        if not result.ok:
            return error_response(request, result.error)
        return Response(status=status.HTTP_204_NO_CONTENT)
