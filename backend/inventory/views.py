from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from products.models import Item
from .filters import ItemStockFilter
from .serializers import ItemStockSerializer, StockCheckSerializer
from .services import InventoryService


class ItemStockListView(generics.ListAPIView):
    """
    Today's stock for every item, sold-out and off-menu ones included.
    Filterable by ?name=, ?is_available= and ?sold_out=.
    """

    serializer_class = ItemStockSerializer
    filterset_class = ItemStockFilter
    queryset = Item.objects.order_by("name")


class StockCheckView(APIView):
    """
    Check whether an item can currently be ordered in a given quantity.
    Used by the checkout page before submitting an order.
    """

    def get(self, request):
        serializer = StockCheckSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        item_id = serializer.validated_data["item_id"]
        quantity = serializer.validated_data["quantity"]

        return Response(
            {
                "item_id": item_id,
                "quantity": quantity,
                "available": InventoryService.check_availability(item_id, quantity),
            }
        )
