import math
from django.db.models import F, Sum
import logging

from core_backend.config import app_settings
from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)


class WaitTimeService:
    """
    Queue and wait-time estimates for the kitchen.

    Everything here is computed from the current set of active orders on
    each call; nothing is cached because that set changes continuously.
    """

    ACTIVE_STATUSES = (Order.OrderStatus.PAID, Order.OrderStatus.PREPARING)

    MINUTE = 60
    EXACT_LIMIT_MIN = 5
    EVEN_LIMIT_MIN = 15
    BUSY_LIMIT_MIN = 25
    BUSY_LABEL = "15+ min (busy!)"
    VERY_BUSY_LABEL = "25+ min (very busy!)"

    @staticmethod
    def active_prep_seconds() -> int:
        """Total prep seconds of every line of every PAID or PREPARING order."""
        total = OrderItem.objects.filter(
            order__status__in=WaitTimeService.ACTIVE_STATUSES
        ).aggregate(
            total=Sum(F("item__prep_time_sec") * F("quantity"))
        )["total"]
        return int(total or 0)

    @staticmethod
    def queue_delay() -> int:
        """
        Seconds of kitchen work already queued ahead of a new order,
        spread across the kitchen's parallel capacity and rounded up.
        """
        total = WaitTimeService.active_prep_seconds()
        return math.ceil(total / app_settings.kitchen_parallelism)

    @staticmethod
    def lines_prep_seconds(lines) -> int:
        """
        Prep seconds for candidate lines. Accepts OrderItem rows,
        (prep_time_sec, quantity) pairs or dicts with those keys.
        """
        total = 0
        for line in lines:
            if isinstance(line, OrderItem):
                total += line.item.prep_time_sec * line.quantity
            elif isinstance(line, dict):
                total += line["prep_time_sec"] * line["quantity"]
            else:
                prep_time_sec, quantity = line
                total += prep_time_sec * quantity
        return total

    @staticmethod
    def estimate_wait(lines) -> int:
        """Queue delay plus this order's own prep time, in seconds."""
        return WaitTimeService.queue_delay() + WaitTimeService.lines_prep_seconds(lines)

    @classmethod
    def format_duration(cls, seconds) -> str:
        """
        Display label for a wait. Short waits get an exact minute count,
        medium ones an even minute count, long ones only a busy label.
        """
        minutes = math.ceil(seconds / cls.MINUTE)

        if minutes <= cls.EXACT_LIMIT_MIN:
            return f"~{minutes} min"
        elif minutes <= cls.EVEN_LIMIT_MIN:
            rounded = math.ceil(minutes / 2) * 2
            return f"~{rounded} min"
        elif minutes <= cls.BUSY_LIMIT_MIN:
            return cls.BUSY_LABEL
        return cls.VERY_BUSY_LABEL
