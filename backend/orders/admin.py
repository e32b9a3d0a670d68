from django.contrib import admin
from .models import Order, OrderItem, OrderCodeSequence
from payments.models import Payment


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("unit_price", "get_line_item_total")
    fields = ("item", "quantity", "unit_price", "get_line_item_total")

    def get_line_item_total(self, obj):
        return obj.total_price

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    readonly_fields = ("method", "status", "amount", "provider_ref", "confirmed_at", "created_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.
    """

    list_display = (
        "short_code",
        "service_date",
        "status",
        "payment_method",
        "total",
        "created_at",
        "paid_at",
        "expires_at",
    )
    list_display_links = ("short_code",)
    search_fields = ("short_code", "phone")
    list_filter = ("status", "payment_method", "service_date")
    readonly_fields = (
        "id",
        "short_code",
        "service_date",
        "total",
        "created_at",
        "updated_at",
        "paid_at",
        "ready_at",
        "picked_up_at",
        "est_ready_at",
        "expires_at",
    )
    inlines = [OrderItemInline, PaymentInline]
    ordering = ("-created_at",)


@admin.register(OrderCodeSequence)
class OrderCodeSequenceAdmin(admin.ModelAdmin):
    list_display = ("name", "value", "reset_at")
    readonly_fields = ("reset_at",)
