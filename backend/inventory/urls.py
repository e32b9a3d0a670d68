from django.urls import path
from .views import ItemStockListView, StockCheckView

app_name = "inventory"

urlpatterns = [
    path("", ItemStockListView.as_view(), name="stock-list"),
    path("check/", StockCheckView.as_view(), name="stock-check"),
]
