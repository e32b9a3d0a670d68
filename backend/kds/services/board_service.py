from typing import Dict, List, Any
from django.db.models import Q
from django.utils import timezone
import logging

from orders.models import Order
from orders.services import WaitTimeService

logger = logging.getLogger(__name__)

Status = Order.OrderStatus


class KitchenBoardService:
    """Service for the kitchen display: every order the kitchen still has to act on"""

    BOARD_STATUSES = [Status.PENDING, Status.PAID, Status.PREPARING, Status.READY]

    # Board column for each status, in display order
    COLUMNS = {
        Status.PENDING: 'pending',
        Status.PAID: 'paid',
        Status.PREPARING: 'preparing',
        Status.READY: 'ready',
    }

    @classmethod
    def get_active_orders(cls, now=None):
        """
        Active orders, oldest first. Pay-on-pickup orders whose hold ran out
        while still PENDING are left off the board.
        """
        now = now or timezone.now()
        not_expired = (
            Q(expires_at__isnull=True)
            | Q(expires_at__gt=now)
            | ~Q(status=Status.PENDING)
        )
        return (
            Order.objects.filter(status__in=cls.BOARD_STATUSES)
            .filter(not_expired)
            .prefetch_related('items__item')
            .order_by('created_at')
        )

    @classmethod
    def get_board(cls, now=None) -> Dict[str, Any]:
        """
        Get the kitchen board

        Returns:
            Dict with orders grouped per column, total_active and the
            current queue delay in seconds
        """
        orders = list(cls.get_active_orders(now))

        grouped: Dict[str, List[Order]] = {column: [] for column in cls.COLUMNS.values()}
        for order in orders:
            grouped[cls.COLUMNS[order.status]].append(order)

        logger.debug(
            f"Kitchen board: {len(orders)} active "
            + ", ".join(f"{column}={len(rows)}" for column, rows in grouped.items())
        )

        return {
            'orders': grouped,
            'total_active': len(orders),
            'queue_delay_sec': WaitTimeService.queue_delay(),
        }
