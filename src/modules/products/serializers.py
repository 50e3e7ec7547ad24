"""Product DRF serializers for API output.

Input is parsed into Pydantic DTOs (``dtos.py``); the serializer only
renders the wire representation, with camelCase timestamps.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of the Product resource."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "description",
            "deleted",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "name", "price", "description", "deleted"]


class ProductPageSerializer(serializers.Serializer):
    """Page envelope used for the OpenAPI schema of the list endpoint."""

    content = ProductSerializer(many=True)
    totalElements = serializers.IntegerField()
    totalPages = serializers.IntegerField()
    number = serializers.IntegerField()
    size = serializers.IntegerField()
