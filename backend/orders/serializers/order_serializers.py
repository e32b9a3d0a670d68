from rest_framework import serializers

from core_backend.config import app_settings
from orders.models import Order, OrderItem
from orders.services import OrderLifecycleService


class OrderItemSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="item.name", read_only=True)
    item_id = serializers.IntegerField(source="item.id", read_only=True)
    total_price = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ["item_id", "name", "quantity", "unit_price", "total_price"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Customer-facing view of an order. `status` is the effective status, so an
    unpaid pay-on-pickup order past its hold reads as EXPIRED.
    """

    status = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)
    poll_interval_sec = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "short_code",
            "status",
            "payment_method",
            "phone",
            "total",
            "est_ready_at",
            "expires_at",
            "created_at",
            "paid_at",
            "ready_at",
            "picked_up_at",
            "items",
            "poll_interval_sec",
        ]
        read_only_fields = fields

    def get_status(self, obj):
        return OrderLifecycleService.effective_status(obj, self.context.get("now"))

    def get_poll_interval_sec(self, obj):
        return app_settings.order_status_poll_seconds


# --- Service-driven Serializers ---

class OrderLineSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    """
    Validates the shape of a new order. Whether the items exist, are on the
    menu and have stock is decided by OrderService.create_order.
    """

    items = OrderLineSerializer(many=True, allow_empty=False)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices)
    phone = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=20
    )

    def validate_phone(self, value):
        value = (value or "").strip()
        return value or None
