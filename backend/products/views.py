from rest_framework.views import APIView
from rest_framework.response import Response
import logging

from orders.services import WaitTimeService
from .serializers import MenuItemSerializer
from .services import ItemService

logger = logging.getLogger(__name__)


class MenuView(APIView):
    """
    Lists the orderable menu with a per-item wait estimate.

    The queue delay is recomputed on every request since the set of active
    orders changes continuously.
    """

    def get(self, request, *args, **kwargs):
        items = ItemService.get_menu_items()
        queue_delay = WaitTimeService.queue_delay()
        serializer = MenuItemSerializer(items, many=True, context={"queue_delay": queue_delay})
        return Response(
            {
                "items": serializer.data,
                "queue_delay_sec": queue_delay,
            }
        )
