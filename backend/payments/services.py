from django.db import transaction
from django.utils import timezone
import logging

from orders.models import Order
from .models import Payment

logger = logging.getLogger(__name__)


class PaymentService:
    """Records payment attempts. Order state changes belong to OrderService."""

    @staticmethod
    def method_for(order: Order) -> str:
        if order.payment_method == Order.PaymentMethod.IN_PERSON:
            return Payment.Method.CASH
        return Payment.Method.CARD

    @staticmethod
    @transaction.atomic
    def record_payment(order: Order, success: bool, provider_ref=None, now=None) -> Payment:
        now = now or timezone.now()
        payment = Payment.objects.create(
            order=order,
            method=PaymentService.method_for(order),
            status=Payment.PaymentStatus.SUCCESS if success else Payment.PaymentStatus.FAILED,
            provider_ref=provider_ref or None,
            amount=order.total,
            confirmed_at=now if success else None,
        )
        if success:
            logger.info(f"Recorded successful payment {payment.id} for order {order.short_code}")
        else:
            logger.warning(f"Recorded failed payment {payment.id} for order {order.short_code}")
        return payment

    @staticmethod
    def get_payments_for_order(order: Order):
        return Payment.objects.filter(order=order).order_by("created_at")
