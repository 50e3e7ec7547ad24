from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    ("Monitor 27\"", "IPS panel, 144 Hz", Decimal("1299.90")),
    ("Mechanical Keyboard", "Brown switches", Decimal("399.90")),
    ("Mouse", "Gamer", Decimal("49.90")),
    ("Notebook 14\"", None, Decimal("3999.00")),
    ("Headset", "Noise cancelling", Decimal("299.90")),
    ("Office Desk", "120 x 60 cm", Decimal("899.00")),
    ("Ergonomic Chair", None, Decimal("1499.00")),
    ("A4 Paper", "500 sheets", Decimal("29.90")),
    ("Blue Pen", None, Decimal("4.90")),
    ("Notebook Stand", "Aluminium", Decimal("149.90")),
]


class Command(BaseCommand):
    help = "Seed database with sample products (skips names that already exist)."

    def handle(self, *args, **options):
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())

        created = 0
        for name, description, price in CATALOG:
            if Product.objects.alive().filter(name=name).exists():
                continue
            result = service.create_product(
                CreateProductDTO(name=name, price=price, description=description)
            )
            if not result.ok:
                raise CommandError(f"Could not seed '{name}': {result.error.message}")
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Seed completed: products={created}"))
