from django.db import transaction
from django.utils import timezone
import logging

from core_backend.config import app_settings
from orders.models import OrderCodeSequence

logger = logging.getLogger(__name__)


class OrderCodeService:
    """
    Issues short human-readable order codes like "8AM-047".

    The counter is a database row, so it survives restarts and is shared by
    every server process. Values wrap modulo ORDER_CODE_MODULUS; on a busy
    enough day codes repeat, which is accepted.
    """

    @staticmethod
    def format_code(number: int) -> str:
        return f"{app_settings.order_code_prefix}{number:0{app_settings.order_code_width}d}"

    @staticmethod
    def _locked_sequence(name=OrderCodeSequence.DEFAULT_NAME):
        sequence, _ = OrderCodeSequence.objects.get_or_create(name=name)
        return OrderCodeSequence.objects.select_for_update().get(pk=sequence.pk)

    @staticmethod
    @transaction.atomic
    def next_code(name=OrderCodeSequence.DEFAULT_NAME) -> str:
        """
        Advances the counter by one and returns the formatted code.

        When called inside an outer transaction the sequence row stays locked
        until that transaction ends, so concurrent order creation is
        serialized on code allocation.
        """
        sequence = OrderCodeService._locked_sequence(name)
        sequence.value = (sequence.value + 1) % app_settings.order_code_modulus
        sequence.save(update_fields=["value"])
        return OrderCodeService.format_code(sequence.value)

    @staticmethod
    @transaction.atomic
    def reset(name=OrderCodeSequence.DEFAULT_NAME) -> OrderCodeSequence:
        """
        Restores the counter to its initial value. Intended to run once at
        the start of each business day.
        """
        sequence = OrderCodeService._locked_sequence(name)
        previous = sequence.value
        sequence.value = OrderCodeSequence.INITIAL_VALUE
        sequence.reset_at = timezone.now()
        sequence.save(update_fields=["value", "reset_at"])
        logger.info(f"Order code sequence '{name}' reset (was {previous})")
        return sequence

    @staticmethod
    def peek(name=OrderCodeSequence.DEFAULT_NAME) -> int:
        """Current counter value without advancing it."""
        return (
            OrderCodeSequence.objects.filter(name=name)
            .values_list("value", flat=True)
            .first()
            or OrderCodeSequence.INITIAL_VALUE
        )
