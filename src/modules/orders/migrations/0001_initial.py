from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "delivery_kind",
                    models.CharField(
                        choices=[("LOCATION", "Condomínio"), ("OTHER", "Outro local")],
                        max_length=20,
                    ),
                ),
                ("delivery_value", models.CharField(max_length=255)),
                (
                    "unit_qualifier",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("CASH", "Dinheiro"),
                            ("CARD", "Cartão"),
                            ("PIX", "Pix"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "change_due",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        default=None,
                        max_digits=10,
                        null=True,
                    ),
                ),
                ("note", models.TextField(blank=True, default="")),
                (
                    "total",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=10
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pendente"), ("PRINTED", "Impresso")],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                (
                    "printed_at",
                    models.DateTimeField(blank=True, default=None, null=True),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-id"],
                "indexes": [
                    models.Index(fields=["status"], name="orders_status_idx"),
                    models.Index(
                        fields=["delivery_kind", "delivery_value"],
                        name="orders_delivery_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("change_due__isnull", True),
                            ("payment_method", "CASH"),
                            _connector="OR",
                        ),
                        name="orders_change_due_cash_only",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total__gte", 0)),
                        name="orders_total_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("product_id", models.BigIntegerField(blank=True, null=True)),
                ("product_name", models.CharField(max_length=255)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "subtotal",
                    models.DecimalField(
                        decimal_places=2, editable=False, max_digits=10
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_lines",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="order_lines_quantity_positive",
                    ),
                ],
            },
        ),
    ]
