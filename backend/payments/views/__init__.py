"""
Payments views package.
"""

from .confirm import ConfirmPaymentView

__all__ = [
    'ConfirmPaymentView',
]
