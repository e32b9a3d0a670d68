"""
Order Service Tests

Tests for placing orders, confirming payments and kitchen status updates:
- Validation and pricing at placement
- When stock is taken for each payment method
- Payment confirmation outcomes and idempotency
- Kitchen advance/cancel rules
"""
import uuid
import pytest
from datetime import timedelta
from django.utils import timezone

from core_backend.exceptions import (
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from orders.models import Order, OrderItem
from orders.services import OrderService
from payments.models import Payment

Status = Order.OrderStatus
Method = Order.PaymentMethod


def line(item, quantity=1):
    return {"item_id": item.id, "quantity": quantity}


@pytest.mark.django_db
class TestCreateOrder:
    """Test OrderService.create_order."""

    def test_in_person_order_reserves_stock_and_expires(self, akara, bread_and_egg):
        """
        CRITICAL: Pay-on-pickup orders take stock immediately and hold it
        for 15 minutes.
        """
        now = timezone.now()

        order = OrderService.create_order([line(akara, 2), line(bread_and_egg)], Method.IN_PERSON, now=now)

        assert order.status == Status.PENDING
        assert order.expires_at == now + timedelta(minutes=15)
        assert order.total == 2 * 30000 + 40000
        akara.refresh_from_db()
        bread_and_egg.refresh_from_db()
        assert akara.available_today == 48
        assert bread_and_egg.available_today == 39

    def test_online_order_does_not_touch_stock(self, akara):
        """Test that online orders take stock only once paid."""
        order = OrderService.create_order([line(akara, 2)], Method.ONLINE)

        assert order.status == Status.PENDING
        assert order.expires_at is None
        akara.refresh_from_db()
        assert akara.available_today == 50

    def test_lines_snapshot_prices(self, akara):
        """Test that later price changes do not affect placed orders."""
        order = OrderService.create_order([line(akara, 2)], Method.ONLINE)
        akara.price = 99999
        akara.save()

        order_item = OrderItem.objects.get(order=order)
        assert order_item.unit_price == 30000
        assert order_item.total_price == 60000
        order.refresh_from_db()
        assert order.total == 60000

    def test_order_gets_short_code_and_phone(self, akara):
        """Test short code format and optional phone."""
        order = OrderService.create_order([line(akara)], Method.ONLINE, phone="08031234567")

        assert order.short_code.startswith("8AM-")
        assert len(order.short_code) == len("8AM-000")
        assert order.phone == "08031234567"
        assert order.service_date == timezone.localdate()

    def test_duplicate_lines_become_one_order_line(self, akara):
        """Test that repeated items are merged into a single line."""
        order = OrderService.create_order([line(akara, 1), line(akara, 2)], Method.ONLINE)

        order_items = list(order.items.all())
        assert len(order_items) == 1
        assert order_items[0].quantity == 3

    def test_empty_order_is_rejected(self, db):
        """Test that an order needs at least one line."""
        with pytest.raises(ValidationError, match="No items"):
            OrderService.create_order([], Method.ONLINE)

    def test_unknown_item_is_rejected(self, akara):
        """Test that an unknown item id is a validation error naming the item."""
        with pytest.raises(ValidationError) as exc_info:
            OrderService.create_order([line(akara), {"item_id": 999999, "quantity": 1}], Method.ONLINE)

        assert exc_info.value.details["item_id"] == 999999
        assert Order.objects.count() == 0

    @pytest.mark.parametrize("item_id", ["abc", "", 1.5j])
    def test_malformed_item_id_is_rejected(self, akara, item_id):
        """Test that an item id that is not a number is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            OrderService.create_order([{"item_id": item_id, "quantity": 1}], Method.ONLINE)

        assert exc_info.value.details == {"item_id": str(item_id)}
        assert Order.objects.count() == 0

    def test_numeric_string_item_id_is_accepted(self, akara):
        """Test that an item id sent as a numeric string still resolves."""
        order = OrderService.create_order([{"item_id": str(akara.id), "quantity": 1}], Method.ONLINE)

        assert order.items.get().item_id == akara.id

    def test_off_menu_item_is_rejected(self, off_menu_item):
        """Test that items taken off the menu cannot be ordered."""
        with pytest.raises(ValidationError, match="Fried Yam"):
            OrderService.create_order([line(off_menu_item)], Method.ONLINE)

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_is_rejected(self, akara, quantity):
        """Test that quantities must be at least one."""
        with pytest.raises(ValidationError):
            OrderService.create_order([line(akara, quantity)], Method.ONLINE)

    def test_invalid_payment_method_is_rejected(self, akara):
        """Test that only ONLINE and IN_PERSON are accepted."""
        with pytest.raises(ValidationError):
            OrderService.create_order([line(akara)], "CRYPTO")

    def test_insufficient_stock_is_a_conflict_naming_the_item(self, last_unit_item):
        """Test that asking for more than remains is refused before anything is written."""
        with pytest.raises(InsufficientStockError) as exc_info:
            OrderService.create_order([line(last_unit_item, 2)], Method.IN_PERSON)

        assert exc_info.value.item.pk == last_unit_item.pk
        assert exc_info.value.to_payload()["item_id"] == last_unit_item.pk
        assert Order.objects.count() == 0

    def test_stale_stock_read_rolls_back_everything(self, last_unit_item, monkeypatch):
        """
        CRITICAL: The pre-check read can be stale. Reservation re-checks at
        decrement time and the whole order is rolled back.

        Scenario:
        - Placement reads 1 unit left
        - Another order takes it before the reservation runs
        - Expected: conflict naming the item, no order, stock stays 0
        """
        from products.models import Item
        from products.services import ItemService

        stale = {last_unit_item.pk: Item.objects.get(pk=last_unit_item.pk)}
        Item.objects.filter(pk=last_unit_item.pk).update(available_today=0)
        monkeypatch.setattr(ItemService, "get_items_by_ids", staticmethod(lambda ids: stale))

        with pytest.raises(InsufficientStockError) as exc_info:
            OrderService.create_order([line(last_unit_item)], Method.IN_PERSON)

        assert exc_info.value.item.pk == last_unit_item.pk
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        last_unit_item.refresh_from_db()
        assert last_unit_item.available_today == 0


@pytest.mark.django_db
class TestConfirmPayment:
    """Test OrderService.confirm_payment."""

    def test_success_marks_online_order_paid_and_takes_stock(self, akara, bread_and_egg, make_order):
        """
        Scenario:
        - Kitchen backlog of 300s (240 + 360 over two cooks)
        - Online order of 2 x Akara paid
        - Expected: PAID, paid_at now, ready in 300 + 480 seconds, stock down by 2
        """
        make_order([(akara, 1)], status=Status.PAID)
        make_order([(bread_and_egg, 1)], status=Status.PAID)
        order = OrderService.create_order([line(akara, 2)], Method.ONLINE)
        now = timezone.now()

        OrderService.confirm_payment(order.id, success=True, provider_ref="ref-1", now=now)

        order.refresh_from_db()
        assert order.status == Status.PAID
        assert order.paid_at == now
        assert order.est_ready_at == now + timedelta(seconds=300 + 480)
        akara.refresh_from_db()
        assert akara.available_today == 48

        payment = Payment.objects.get(order=order)
        assert payment.status == Payment.PaymentStatus.SUCCESS
        assert payment.method == Payment.Method.CARD
        assert payment.amount == order.total
        assert payment.provider_ref == "ref-1"
        assert payment.confirmed_at == now

    def test_failure_records_payment_and_leaves_order_pending(self, akara):
        """Test that a failed attempt is recorded and nothing else changes."""
        order = OrderService.create_order([line(akara)], Method.ONLINE)

        OrderService.confirm_payment(order.id, success=False)

        order.refresh_from_db()
        assert order.status == Status.PENDING
        assert order.paid_at is None
        payment = Payment.objects.get(order=order)
        assert payment.status == Payment.PaymentStatus.FAILED
        assert payment.confirmed_at is None
        akara.refresh_from_db()
        assert akara.available_today == 50

    def test_success_after_failure(self, akara):
        """Test that a customer can retry after a failed payment."""
        order = OrderService.create_order([line(akara)], Method.ONLINE)

        OrderService.confirm_payment(order.id, success=False)
        OrderService.confirm_payment(order.id, success=True)

        order.refresh_from_db()
        assert order.status == Status.PAID
        statuses = sorted(order.payments.values_list("status", flat=True))
        assert statuses == [Payment.PaymentStatus.FAILED, Payment.PaymentStatus.SUCCESS]

    def test_second_success_keeps_paid_at(self, akara):
        """
        CRITICAL: A repeated success callback is recorded but the order
        keeps its original paid_at and stock is only taken once.
        """
        order = OrderService.create_order([line(akara)], Method.ONLINE)
        first = timezone.now()
        OrderService.confirm_payment(order.id, success=True, now=first)

        OrderService.confirm_payment(order.id, success=True, now=first + timedelta(minutes=2))

        order.refresh_from_db()
        assert order.status == Status.PAID
        assert order.paid_at == first
        assert order.payments.filter(status=Payment.PaymentStatus.SUCCESS).count() == 2
        akara.refresh_from_db()
        assert akara.available_today == 49

    def test_in_person_payment_does_not_take_stock_twice(self, akara):
        """Test that pay-on-pickup orders keep the stock reserved at placement."""
        order = OrderService.create_order([line(akara, 2)], Method.IN_PERSON)

        OrderService.confirm_payment(order.id, success=True)

        order.refresh_from_db()
        assert order.status == Status.PAID
        assert order.expires_at is None
        assert order.payments.get().method == Payment.Method.CASH
        akara.refresh_from_db()
        assert akara.available_today == 48

    def test_online_payment_after_sell_out_is_rolled_back(self, last_unit_item):
        """
        CRITICAL: If an online order's items sold out before payment, the
        payment, status change and reservation are all rolled back.
        """
        order = OrderService.create_order([line(last_unit_item)], Method.ONLINE)
        OrderService.create_order([line(last_unit_item)], Method.IN_PERSON)

        with pytest.raises(InsufficientStockError):
            OrderService.confirm_payment(order.id, success=True)

        order.refresh_from_db()
        assert order.status == Status.PENDING
        assert order.paid_at is None
        assert not order.payments.exists()

    def test_success_on_cancelled_order_is_a_conflict(self, akara):
        """Test that a cancelled order cannot be paid and nothing is recorded."""
        order = OrderService.create_order([line(akara)], Method.IN_PERSON)
        OrderService.cancel_order(order.short_code)

        with pytest.raises(ConflictError):
            OrderService.confirm_payment(order.id, success=True)

        assert not Payment.objects.filter(order=order).exists()

    def test_success_on_expired_order_is_a_conflict(self, akara):
        """Test that a lapsed pay-on-pickup order cannot be paid."""
        placed = timezone.now() - timedelta(minutes=20)
        order = OrderService.create_order([line(akara)], Method.IN_PERSON, now=placed)

        with pytest.raises(ConflictError):
            OrderService.confirm_payment(order.id, success=True)

        order.refresh_from_db()
        assert order.status == Status.PENDING
        assert not order.payments.exists()

    def test_unknown_order(self, db):
        """Test that unknown and malformed ids are not found."""
        with pytest.raises(NotFoundError):
            OrderService.confirm_payment(uuid.uuid4(), success=True)
        with pytest.raises(NotFoundError):
            OrderService.confirm_payment("not-a-uuid", success=True)


@pytest.mark.django_db
class TestLookup:
    """Test order lookup by short code."""

    def test_lookup_by_code(self, akara):
        """Test that an order can be found by its short code."""
        order = OrderService.create_order([line(akara)], Method.ONLINE)

        assert OrderService.get_order_by_code(order.short_code).pk == order.pk

    def test_lookup_prefers_most_recent_day(self, akara, make_order):
        """Test that codes reused across days resolve to today's order."""
        yesterday = timezone.localdate() - timedelta(days=1)
        make_order([(akara, 1)], short_code="8AM-010", service_date=yesterday)
        today = make_order([(akara, 1)], short_code="8AM-010")

        assert OrderService.get_order_by_code("8AM-010").pk == today.pk

    def test_unknown_code(self, db):
        """Test that an unknown code is not found."""
        with pytest.raises(NotFoundError):
            OrderService.get_order_by_code("8AM-404")


@pytest.mark.django_db
class TestKitchenStatusUpdates:
    """Test update_status, advance_order and cancel_order."""

    def test_advance_walks_the_whole_pipeline(self, akara):
        """Test PENDING -> PAID -> PREPARING -> READY -> PICKED_UP one step at a time."""
        order = OrderService.create_order([line(akara)], Method.IN_PERSON)
        code = order.short_code

        seen = [OrderService.advance_order(code).status for _ in range(4)]

        assert seen == [Status.PAID, Status.PREPARING, Status.READY, Status.PICKED_UP]
        order.refresh_from_db()
        assert order.paid_at is not None
        assert order.ready_at is not None
        assert order.picked_up_at is not None

    def test_advance_past_pickup_is_a_conflict(self, akara, make_order):
        """Test that a picked-up order cannot be advanced further."""
        order = make_order([(akara, 1)], status=Status.PICKED_UP)

        with pytest.raises(ConflictError):
            OrderService.advance_order(order.short_code)

    def test_marking_paid_records_a_payment(self, akara):
        """Test that the kitchen marking an order PAID goes through payment confirmation."""
        order = OrderService.create_order([line(akara)], Method.IN_PERSON)

        OrderService.update_status(order.short_code, Status.PAID)

        order.refresh_from_db()
        assert order.status == Status.PAID
        payment = order.payments.get()
        assert payment.status == Payment.PaymentStatus.SUCCESS
        assert payment.method == Payment.Method.CASH

    def test_marking_paid_twice_is_a_conflict(self, akara):
        """Test that the kitchen cannot mark an already paid order PAID again."""
        order = OrderService.create_order([line(akara)], Method.IN_PERSON)
        OrderService.update_status(order.short_code, Status.PAID)

        with pytest.raises(ConflictError):
            OrderService.update_status(order.short_code, Status.PAID)

        assert order.payments.count() == 1

    def test_marking_paid_rechecks_status_under_lock(self, akara, monkeypatch):
        """
        Scenario:
        - Two kitchen "mark paid" requests both read the order while PENDING
        - The first one pays it
        - The second one still holds the PENDING snapshot
        - Expected: the second is a conflict and no second payment is stored
        """
        order = OrderService.create_order([line(akara)], Method.IN_PERSON)
        stale = OrderService.get_order_by_code(order.short_code)
        OrderService.update_status(order.short_code, Status.PAID)

        monkeypatch.setattr(OrderService, "get_order_by_code", staticmethod(lambda code: stale))

        with pytest.raises(ConflictError) as exc_info:
            OrderService.update_status(order.short_code, Status.PAID)

        assert exc_info.value.details == {"status": Status.PAID}
        assert order.payments.count() == 1

    def test_skipping_a_step_is_a_conflict(self, akara, make_order):
        """Test that PAID cannot jump straight to READY."""
        order = make_order([(akara, 1)], status=Status.PAID)

        with pytest.raises(ConflictError):
            OrderService.update_status(order.short_code, Status.READY)

    @pytest.mark.parametrize("target", [Status.EXPIRED, Status.PENDING, "COOKING"])
    def test_unsupported_targets_are_rejected(self, akara, make_order, target):
        """Test that EXPIRED, PENDING and unknown values cannot be requested."""
        order = make_order([(akara, 1)])

        with pytest.raises(ValidationError):
            OrderService.update_status(order.short_code, target)

    def test_cancel_pending_order_keeps_stock_taken(self, akara):
        """Test that cancelling does not return held stock."""
        order = OrderService.create_order([line(akara, 2)], Method.IN_PERSON)

        cancelled = OrderService.cancel_order(order.short_code)

        assert cancelled.status == Status.CANCELLED
        akara.refresh_from_db()
        assert akara.available_today == 48

    def test_cancel_paid_order_is_a_conflict(self, akara, make_order):
        """Test that only PENDING orders can be cancelled."""
        order = make_order([(akara, 1)], status=Status.PAID)

        with pytest.raises(ConflictError):
            OrderService.cancel_order(order.short_code)
