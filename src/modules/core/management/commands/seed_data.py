from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.orders.dtos import SubmitOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import UpsertProductDTO
from modules.products.exceptions import OutOfStock
from modules.products.ledger import InventoryLedger
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    ("Água Mineral 20L", Decimal("8.50"), 120),
    ("Gás P13", Decimal("95.00"), 40),
    ("Água Mineral 1,5L (fardo c/ 6)", Decimal("14.90"), 60),
    ("Gelo 5kg", Decimal("12.00"), 30),
    ("Carvão 3kg", Decimal("18.00"), 25),
]

LOCATIONS = [
    "Residencial Bela Vista",
    "Condomínio Jardim das Flores",
    "Residencial Parque Verde",
]

PAYMENTS = [
    {"method": "CASH", "change_due": "100.00"},
    {"method": "CASH"},
    {"method": "CARD"},
    {"method": "PIX"},
]


class Command(BaseCommand):
    help = "Seed database with the store catalog and a few pending orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=10)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        products = self._seed_products()
        orders_created = self._seed_orders(products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())
        products: list[Product] = []
        for name, price, stock in CATALOG:
            product = Product.objects.filter(name=name).first()
            if product is None:
                product = service.upsert_product(
                    UpsertProductDTO(name=name, price=price, stock=stock)
                )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(self, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            ledger=InventoryLedger(ProductDjangoRepository()),
        )
        orders_created = 0
        for i in range(count):
            picked = random.sample(products, k=random.randint(1, min(3, len(products))))
            if i % 4 == 3:
                delivery = {"kind": "OTHER", "address": f"Rua das Palmeiras, {100 + i}"}
            else:
                delivery = {"kind": "LOCATION", "name": random.choice(LOCATIONS)}
            payload = {
                "items": [
                    {
                        "product_id": product.id,
                        "name": product.name,
                        "price": str(product.price),
                        "quantity": random.randint(1, 3),
                    }
                    for product in picked
                ],
                "delivery": delivery,
                "unit": f"Casa {random.randint(1, 80)}",
                "payment": random.choice(PAYMENTS),
                "note": "Seed order" if i % 3 == 0 else "",
            }
            try:
                service.submit_order(SubmitOrderDTO.from_payload(payload))
            except OutOfStock as exc:
                self.stdout.write(self.style.WARNING(f"Skipping order {i + 1}: {exc}"))
                continue
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
