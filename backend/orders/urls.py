from django.urls import path

from .views import OrderAdvanceView, OrderCancelView, OrderCreateView, OrderDetailView

app_name = "orders"

urlpatterns = [
    path("", OrderCreateView.as_view(), name="order-create"),
    path("<str:code>/", OrderDetailView.as_view(), name="order-detail"),
    path("<str:code>/advance/", OrderAdvanceView.as_view(), name="order-advance"),
    path("<str:code>/cancel/", OrderCancelView.as_view(), name="order-cancel"),
]
