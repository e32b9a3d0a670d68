import uuid
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from products.models import Item


class Order(models.Model):
    class OrderStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")  # Placed, waiting for payment
        PAID = "PAID", _("Paid")  # Paid, queued for the kitchen
        PREPARING = "PREPARING", _("Preparing")
        READY = "READY", _("Ready for Pickup")
        PICKED_UP = "PICKED_UP", _("Picked Up")
        CANCELLED = "CANCELLED", _("Cancelled")
        EXPIRED = "EXPIRED", _(
            "Expired"
        )  # Pay-on-pickup hold ran out before payment

    class PaymentMethod(models.TextChoices):
        ONLINE = "ONLINE", _("Pay Online")
        IN_PERSON = "IN_PERSON", _("Pay at Pickup")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    short_code = models.CharField(
        max_length=20,
        db_index=True,
        help_text=_("Human-readable code the customer quotes at pickup, e.g. 8AM-047."),
    )
    service_date = models.DateField(
        default=timezone.localdate,
        help_text=_("Business day the short code was issued for. Codes repeat across days."),
    )
    status = models.CharField(
        max_length=10, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    payment_method = models.CharField(
        max_length=10, choices=PaymentMethod.choices
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        help_text=_("Optional contact phone number."),
    )
    total = models.PositiveIntegerField(
        help_text=_("Order total in minor-currency units."),
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    ready_at = models.DateTimeField(null=True, blank=True)
    picked_up_at = models.DateTimeField(null=True, blank=True)
    est_ready_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Estimated time the order will be ready, set when it is paid."),
    )
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text=_("Pay-on-pickup orders only: when the stock hold lapses if still unpaid."),
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_stat_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["service_date", "short_code"],
                name="unique_short_code_per_day",
            ),
        ]

    def __str__(self):
        return f"Order {self.short_code} ({self.payment_method}) - {self.status}"

    def is_expired(self, now=None):
        """
        A pay-on-pickup order whose hold has lapsed while still PENDING.
        Nothing rewrites the stored status; callers derive it on read.
        """
        if self.status != self.OrderStatus.PENDING or self.expires_at is None:
            return False
        return self.expires_at <= (now or timezone.now())

    def save(self, *args, **kwargs):
        if not self._state.adding:
            self.updated_at = timezone.now()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "updated_at" not in update_fields:
                kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    item = models.ForeignKey(
        Item, on_delete=models.PROTECT, related_name="order_items"
    )
    quantity = models.PositiveIntegerField(default=1)

    # Price snapshot
    unit_price = models.PositiveIntegerField(
        help_text=_("Price of one unit at the time the order was placed."),
    )

    class Meta:
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.quantity} of {self.item.name} in Order {self.order.short_code}"

    @property
    def total_price(self):
        return self.quantity * self.unit_price


class OrderCodeSequence(models.Model):
    """
    Persisted counter behind the short order codes.

    A single row per sequence name, incremented under a row lock inside the
    order-creating transaction so every server instance shares it.
    """

    DEFAULT_NAME = "orders"
    INITIAL_VALUE = 0

    name = models.CharField(max_length=50, unique=True, default=DEFAULT_NAME)
    value = models.PositiveIntegerField(default=INITIAL_VALUE)
    reset_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Order Code Sequence")
        verbose_name_plural = _("Order Code Sequences")

    def __str__(self):
        return f"{self.name}: {self.value}"
