from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from django.utils import timezone
import logging

from core_backend.config import app_settings
from orders.serializers import OrderSerializer
from .services import KitchenBoardService

logger = logging.getLogger(__name__)


@api_view(['GET'])
def kitchen_board(request):
    """
    Active orders for the kitchen display, grouped by status column.

    Response:
    - orders: {pending, paid, preparing, ready}, each oldest first
    - total_active: number of orders on the board
    - queue_delay_sec: kitchen backlog a newly paid order would wait behind
    - poll_interval_sec: how often the display should refresh
    """
    now = timezone.now()
    board = KitchenBoardService.get_board(now)
    context = {'now': now}

    orders = {
        column: OrderSerializer(rows, many=True, context=context).data
        for column, rows in board['orders'].items()
    }

    logger.info(f"API: Kitchen board with {board['total_active']} active orders")

    return Response(
        {
            'orders': orders,
            'total_active': board['total_active'],
            'queue_delay_sec': board['queue_delay_sec'],
            'poll_interval_sec': app_settings.kitchen_poll_seconds,
            'timestamp': now.isoformat(),
        },
        status=status.HTTP_200_OK,
    )
