import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("short_code", models.CharField(db_index=True, help_text="Human-readable code the customer quotes at pickup, e.g. 8AM-047.", max_length=20)),
                ("service_date", models.DateField(default=django.utils.timezone.localdate, help_text="Business day the short code was issued for. Codes repeat across days.")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("PAID", "Paid"),
                            ("PREPARING", "Preparing"),
                            ("READY", "Ready for Pickup"),
                            ("PICKED_UP", "Picked Up"),
                            ("CANCELLED", "Cancelled"),
                            ("EXPIRED", "Expired"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("payment_method", models.CharField(choices=[("ONLINE", "Pay Online"), ("IN_PERSON", "Pay at Pickup")], max_length=10)),
                ("phone", models.CharField(blank=True, help_text="Optional contact phone number.", max_length=20, null=True)),
                ("total", models.PositiveIntegerField(help_text="Order total in minor-currency units.")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("ready_at", models.DateTimeField(blank=True, null=True)),
                ("picked_up_at", models.DateTimeField(blank=True, null=True)),
                ("est_ready_at", models.DateTimeField(blank=True, help_text="Estimated time the order will be ready, set when it is paid.", null=True)),
                ("expires_at", models.DateTimeField(blank=True, db_index=True, help_text="Pay-on-pickup orders only: when the stock hold lapses if still unpaid.", null=True)),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "created_at"], name="order_stat_created_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("service_date", "short_code"), name="unique_short_code_per_day")
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("unit_price", models.PositiveIntegerField(help_text="Price of one unit at the time the order was placed.")),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="order_items", to="products.item")),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="orders.order")),
            ],
            options={
                "verbose_name": "Order Item",
                "verbose_name_plural": "Order Items",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 1)), name="order_item_quantity_positive")
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderCodeSequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(default="orders", max_length=50, unique=True)),
                ("value", models.PositiveIntegerField(default=0)),
                ("reset_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Order Code Sequence",
                "verbose_name_plural": "Order Code Sequences",
            },
        ),
    ]
