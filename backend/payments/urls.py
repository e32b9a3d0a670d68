from django.urls import path

from .views import ConfirmPaymentView

app_name = "payments"

urlpatterns = [
    path("confirm/", ConfirmPaymentView.as_view(), name="payment-confirm"),
]
