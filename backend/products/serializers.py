from rest_framework import serializers
from .models import Item


class ItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = [
            "id",
            "name",
            "price",
            "prep_time_sec",
            "available_today",
        ]
        read_only_fields = fields


class MenuItemSerializer(ItemSerializer):
    """
    Menu entry with the wait estimate a customer would see if they ordered
    this item right now. Expects `queue_delay` in the serializer context.
    """

    estimated_wait = serializers.SerializerMethodField()

    class Meta(ItemSerializer.Meta):
        fields = ItemSerializer.Meta.fields + ["estimated_wait"]
        read_only_fields = fields

    def get_estimated_wait(self, obj):
        from orders.services import WaitTimeService

        queue_delay = self.context.get("queue_delay", 0)
        return WaitTimeService.format_duration(queue_delay + obj.prep_time_sec)
