from payments.serializers import ConfirmPaymentSerializer
from orders.serializers import OrderSerializer
from orders.services import OrderService
from .base import BasePaymentView


class ConfirmPaymentView(BasePaymentView):
    """
    Payment confirmation callback.

    Returns either:
    - 200 {"success": true, ...}: payment recorded and order PAID (or already paid)
    - 200 {"success": false, ...}: failed attempt recorded, order still PENDING
    - 404: Unknown order
    - 409: Order cancelled or expired
    """

    def post(self, request, *args, **kwargs):
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderService.confirm_payment(
            order_id=data["order_id"],
            success=data["success"],
            provider_ref=data.get("provider_ref"),
        )

        if not data["success"]:
            return self.create_success_response({"success": False, "message": "Payment failed"})

        order_data = OrderSerializer(OrderService.get_order(order.pk)).data
        return self.create_success_response(
            {
                "success": True,
                "message": "Payment confirmed",
                "est_ready_at": order_data["est_ready_at"],
                "order": order_data,
            }
        )
