from django_filters import rest_framework as filters
from products.models import Item


class ItemStockFilter(filters.FilterSet):
    name = filters.CharFilter(field_name="name", lookup_expr="icontains")
    sold_out = filters.BooleanFilter(method="filter_sold_out")

    class Meta:
        model = Item
        fields = ["name", "is_available", "sold_out"]

    def filter_sold_out(self, queryset, name, value):
        if value:
            return queryset.filter(available_today=0)
        return queryset.filter(available_today__gt=0)
