from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "method", "status", "amount", "confirmed_at", "created_at")
    list_filter = ("status", "method")
    search_fields = ("order__short_code", "provider_ref")
    readonly_fields = (
        "id",
        "order",
        "method",
        "status",
        "provider_ref",
        "amount",
        "confirmed_at",
        "created_at",
    )
    ordering = ("-created_at",)
