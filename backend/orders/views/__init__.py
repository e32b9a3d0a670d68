"""
Orders views package.
"""

from .order_views import OrderCreateView, OrderDetailView
from .status_actions import OrderAdvanceView, OrderCancelView

__all__ = [
    'OrderCreateView',
    'OrderDetailView',
    'OrderAdvanceView',
    'OrderCancelView',
]
