"""
Orders services package - service layer for the order lifecycle.

- OrderService: placing orders, confirming payments, kitchen status updates
- OrderLifecycleService: the status state machine and its timestamps
- OrderCodeService: short human-readable order codes
- WaitTimeService: queue delay and wait estimates
"""

# Core order operations
from .order_service import OrderService

# State machine
from .lifecycle_service import OrderLifecycleService

# Order codes
from .code_service import OrderCodeService

# Wait time estimates
from .wait_time_service import WaitTimeService

__all__ = [
    'OrderService',
    'OrderLifecycleService',
    'OrderCodeService',
    'WaitTimeService',
]
