"""
Orders serializers package.
"""

# Order serializers
from .order_serializers import (
    OrderItemSerializer,
    OrderSerializer,
    OrderLineSerializer,
    OrderCreateSerializer,
)

# Status serializers
from .status_serializers import UpdateOrderStatusSerializer

__all__ = [
    # Orders
    'OrderItemSerializer',
    'OrderSerializer',
    'OrderLineSerializer',
    'OrderCreateSerializer',
    # Status
    'UpdateOrderStatusSerializer',
]
