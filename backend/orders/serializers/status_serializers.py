from rest_framework import serializers

from orders.services import OrderService


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Serializer specifically for validating a kitchen status update.
    EXPIRED is derived from the pay-on-pickup hold and cannot be requested.
    """

    status = serializers.ChoiceField(
        choices=[(value, value) for value in OrderService.KITCHEN_STATUS_TARGETS]
    )
