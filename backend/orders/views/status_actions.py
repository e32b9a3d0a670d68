from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from orders.serializers import OrderSerializer
from orders.services import OrderService

logger = logging.getLogger(__name__)


class StatusActionMixin:
    """
    Shared handling for kitchen status changes. Service errors propagate to
    the REST framework exception handler.
    """

    def _handle_status_change(self, code, action, *args):
        order = action(code, *args)
        logger.info(f"Kitchen moved order {order.short_code} to {order.status}")
        order = OrderService.get_order(order.pk)
        return Response(OrderSerializer(order).data)


class OrderAdvanceView(StatusActionMixin, APIView):
    """Moves an order one step along the kitchen pipeline."""

    def post(self, request, code, *args, **kwargs):
        return self._handle_status_change(code, OrderService.advance_order)


class OrderCancelView(StatusActionMixin, APIView):
    """Cancels a PENDING order."""

    def post(self, request, code, *args, **kwargs):
        return self._handle_status_change(code, OrderService.cancel_order)
