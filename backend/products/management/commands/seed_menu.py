"""
Django management command to load the stand's standard breakfast menu.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Item

MENU_ITEMS = [
    {"name": "Akara (5 pcs)", "price": 30000, "prep_time_sec": 240, "daily_quantity": 50},
    {"name": "Bread & Egg", "price": 40000, "prep_time_sec": 360, "daily_quantity": 40},
    {"name": "Pap (cup)", "price": 15000, "prep_time_sec": 60, "daily_quantity": 60},
    # Pre-made, just serving
    {"name": "Moi Moi (wrap)", "price": 25000, "prep_time_sec": 120, "daily_quantity": 30},
    {"name": "Fried Yam (6 pcs)", "price": 35000, "prep_time_sec": 300, "daily_quantity": 35},
]


class Command(BaseCommand):
    help = "Seed the breakfast menu with the standard items"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all existing items before seeding (fails if orders reference them)",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            if options["reset"]:
                deleted, _ = Item.objects.all().delete()
                self.stdout.write(f"Removed {deleted} existing items")

            created_count = 0
            for data in MENU_ITEMS:
                _, created = Item.objects.update_or_create(
                    name=data["name"],
                    defaults={
                        "price": data["price"],
                        "prep_time_sec": data["prep_time_sec"],
                        "daily_quantity": data["daily_quantity"],
                        "available_today": data["daily_quantity"],
                        "is_available": True,
                    },
                )
                if created:
                    created_count += 1
                self.stdout.write(f"  ✓ {data['name']}: {data['daily_quantity']} units")

        self.stdout.write(
            self.style.SUCCESS(f"Seeded {len(MENU_ITEMS)} menu items ({created_count} new)")
        )
