from rest_framework import serializers


class ConfirmPaymentSerializer(serializers.Serializer):
    """
    Body of the payment confirmation callback. Stands in for a payment
    provider webhook: `success` says whether the charge went through.
    """

    order_id = serializers.CharField()
    success = serializers.BooleanField()
    provider_ref = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
