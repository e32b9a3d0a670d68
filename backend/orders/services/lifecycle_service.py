from datetime import timedelta
from django.db import transaction
from django.utils import timezone
import logging

from core_backend.exceptions import ConflictError, ValidationError
from orders.models import Order
from .wait_time_service import WaitTimeService

logger = logging.getLogger(__name__)

Status = Order.OrderStatus


class OrderLifecycleService:
    """
    Order state machine: which status may follow which, and the timestamps
    stamped on entering a status.

    EXPIRED is never written by a transition in normal operation. A PENDING
    pay-on-pickup order past its expires_at is reported as EXPIRED on read
    (see Order.is_expired) and treated as terminal here.
    """

    # Valid status transitions for order state machine
    VALID_STATUS_TRANSITIONS = {
        Status.PENDING: [Status.PAID, Status.CANCELLED, Status.EXPIRED],
        Status.PAID: [Status.PREPARING],
        Status.PREPARING: [Status.READY],
        Status.READY: [Status.PICKED_UP],
        Status.PICKED_UP: [],
        Status.CANCELLED: [],
        Status.EXPIRED: [],
    }

    # Kitchen "advance" only walks this path, one step at a time
    HAPPY_PATH = [
        Status.PENDING,
        Status.PAID,
        Status.PREPARING,
        Status.READY,
        Status.PICKED_UP,
    ]

    TERMINAL_STATUSES = frozenset(
        status for status, targets in VALID_STATUS_TRANSITIONS.items() if not targets
    )

    @staticmethod
    def effective_status(order: Order, now=None) -> str:
        if order.is_expired(now):
            return Status.EXPIRED
        return order.status

    @staticmethod
    def can_transition(current_status: str, new_status: str) -> bool:
        return new_status in OrderLifecycleService.VALID_STATUS_TRANSITIONS.get(current_status, [])

    @staticmethod
    def next_status(current_status: str):
        """The next happy-path status, or None at the end of the path or off it."""
        path = OrderLifecycleService.HAPPY_PATH
        if current_status not in path:
            return None
        index = path.index(current_status)
        if index + 1 >= len(path):
            return None
        return path[index + 1]

    @staticmethod
    def validate_transition(order: Order, new_status: str, now=None) -> str:
        """
        Raises ValidationError for unknown statuses and ConflictError for
        transitions the table does not allow. Returns the effective current status.
        """
        if new_status not in Status.values:
            raise ValidationError(f"'{new_status}' is not a valid order status.")

        current = OrderLifecycleService.effective_status(order, now)
        if current == Status.EXPIRED and new_status != Status.EXPIRED:
            raise ConflictError(
                f"Order {order.short_code} has expired.",
                details={"status": current},
            )
        if not OrderLifecycleService.can_transition(current, new_status):
            raise ConflictError(
                f"Cannot transition order {order.short_code} from {current} to {new_status}.",
                details={"status": current},
            )
        return current

    @staticmethod
    @transaction.atomic
    def transition(order: Order, new_status: str, now=None) -> Order:
        """
        Moves the order to new_status and stamps the matching timestamp.

        Entering PAID stamps paid_at (never overwritten) and asks the wait
        time estimator for est_ready_at. READY stamps ready_at, PICKED_UP
        stamps picked_up_at.
        """
        now = now or timezone.now()
        previous = OrderLifecycleService.validate_transition(order, new_status, now)

        update_fields = ["status"]
        if new_status == Status.PAID:
            if order.paid_at is None:
                order.paid_at = now
                update_fields.append("paid_at")
            # Queue is measured before this order joins it
            wait_seconds = WaitTimeService.estimate_wait(order.items.select_related("item"))
            order.est_ready_at = now + timedelta(seconds=wait_seconds)
            update_fields.append("est_ready_at")
        elif new_status == Status.READY:
            order.ready_at = now
            update_fields.append("ready_at")
        elif new_status == Status.PICKED_UP:
            order.picked_up_at = now
            update_fields.append("picked_up_at")

        if previous == Status.PENDING and order.expires_at is not None:
            # The pay-on-pickup hold only applies while the order is PENDING
            order.expires_at = None
            update_fields.append("expires_at")

        order.status = new_status
        order.save(update_fields=update_fields)

        logger.info(f"Order {order.short_code} moved {previous} -> {new_status}")
        return order
