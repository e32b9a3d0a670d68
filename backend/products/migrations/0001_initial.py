import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Name shown on the menu.", max_length=200)),
                ("price", models.PositiveIntegerField(help_text="Unit price in minor-currency units (e.g. kobo).")),
                ("prep_time_sec", models.PositiveIntegerField(help_text="Kitchen preparation time for one unit, in seconds.")),
                ("daily_quantity", models.PositiveIntegerField(default=0, help_text="How many units the stand prepares per day.")),
                ("available_today", models.PositiveIntegerField(default=0, help_text="Units still available today. Reset each morning.")),
                ("is_available", models.BooleanField(default=True, help_text="Whether the item is on the menu at all.")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Item",
                "verbose_name_plural": "Items",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["is_available", "available_today"], name="item_avail_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("available_today__lte", models.F("daily_quantity"))),
                        name="item_available_within_daily_quantity",
                    )
                ],
            },
        ),
    ]
