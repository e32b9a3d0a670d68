from django.contrib import admin
from .models import Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "get_price_formatted",
        "prep_time_sec",
        "available_today",
        "daily_quantity",
        "is_available",
    )
    list_editable = ("is_available",)
    list_filter = ("is_available",)
    search_fields = ("name",)
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at")

    def get_price_formatted(self, obj):
        return f"{obj.price / 100:,.2f}"

    get_price_formatted.short_description = "Price"
