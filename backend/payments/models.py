import uuid
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from orders.models import Order


class Payment(models.Model):
    """
    One payment attempt against an Order.

    An order can collect several attempts (a failed card followed by a
    successful one); only a SUCCESS attempt moves the order to PAID.
    """

    class PaymentStatus(models.TextChoices):
        SUCCESS = "SUCCESS", _("Success")
        FAILED = "FAILED", _("Failed")

    class Method(models.TextChoices):
        CARD = "card", _("Card (online)")
        CASH = "cash", _("Cash (at pickup)")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="payments"
    )
    method = models.CharField(
        max_length=20, choices=Method.choices, default=Method.CARD
    )
    status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        help_text=_("Outcome of this payment attempt."),
    )
    provider_ref = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text=_("Reference returned by the payment provider, if any."),
    )
    amount = models.PositiveIntegerField(
        help_text=_("Amount in minor-currency units."),
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")
        indexes = [
            models.Index(fields=["order", "status"], name="payment_order_status_idx"),
        ]

    def __str__(self):
        return f"Payment {self.id} for Order {self.order.short_code} - {self.status}"

    @property
    def is_successful(self):
        return self.status == self.PaymentStatus.SUCCESS
