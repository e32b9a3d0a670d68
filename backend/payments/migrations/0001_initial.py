import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("method", models.CharField(choices=[("card", "Card (online)"), ("cash", "Cash (at pickup)")], default="card", max_length=20)),
                ("status", models.CharField(choices=[("SUCCESS", "Success"), ("FAILED", "Failed")], help_text="Outcome of this payment attempt.", max_length=10)),
                ("provider_ref", models.CharField(blank=True, help_text="Reference returned by the payment provider, if any.", max_length=255, null=True)),
                ("amount", models.PositiveIntegerField(help_text="Amount in minor-currency units.")),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="orders.order")),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["order", "status"], name="payment_order_status_idx")],
            },
        ),
    ]
