from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from orders.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)
from orders.services import OrderService
from .status_actions import StatusActionMixin

logger = logging.getLogger(__name__)


class OrderCreateView(APIView):
    """
    Places a new order.

    Returns either:
    - 201: Order created (PENDING)
    - 400: Malformed request, unknown or unavailable item
    - 409: Not enough stock left for an item
    """

    def post(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderService.create_order(
            lines=data["items"],
            payment_method=data["payment_method"],
            phone=data.get("phone"),
        )
        order = OrderService.get_order(order.pk)
        return Response(
            {"success": True, "order": OrderSerializer(order).data},
            status=status.HTTP_201_CREATED,
        )


class OrderDetailView(StatusActionMixin, APIView):
    """
    GET: customer order tracking by short code.
    PATCH: kitchen status update, body {"status": "..."}.
    """

    def get(self, request, code, *args, **kwargs):
        order = OrderService.get_order_by_code(code)
        return Response(OrderSerializer(order).data)

    def patch(self, request, code, *args, **kwargs):
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._handle_status_change(
            code, OrderService.update_status, serializer.validated_data["status"]
        )
