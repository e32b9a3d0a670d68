from rest_framework import serializers
from products.models import Item


class ItemStockSerializer(serializers.ModelSerializer):
    is_sold_out = serializers.BooleanField(read_only=True)

    class Meta:
        model = Item
        fields = [
            "id",
            "name",
            "daily_quantity",
            "available_today",
            "is_available",
            "is_sold_out",
        ]
        read_only_fields = fields


class StockCheckSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)
