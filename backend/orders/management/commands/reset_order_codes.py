from django.core.management.base import BaseCommand

from core_backend.config import app_settings
from orders.models import OrderCodeSequence
from orders.services import OrderCodeService


class Command(BaseCommand):
    help = "Reset the short order code counter (run once at the start of each business day)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show the current counter without resetting it",
        )
        parser.add_argument(
            "--sequence",
            default=OrderCodeSequence.DEFAULT_NAME,
            help="Name of the sequence to reset",
        )

    def handle(self, *args, **options):
        name = options["sequence"]
        current = OrderCodeService.peek(name)

        if options["dry_run"]:
            upcoming = (current + 1) % app_settings.order_code_modulus
            self.stdout.write(
                self.style.WARNING(
                    f"DRY RUN MODE - counter '{name}' is at {current}, "
                    f"next code would be {OrderCodeService.format_code(upcoming)}"
                )
            )
            return

        OrderCodeService.reset(name)
        self.stdout.write(
            self.style.SUCCESS(
                f"Reset order code counter '{name}' (was {current}); next code is "
                f"{OrderCodeService.format_code(OrderCodeSequence.INITIAL_VALUE + 1)}"
            )
        )
