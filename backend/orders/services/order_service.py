import uuid
from datetime import timedelta
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone
import logging

from core_backend.config import app_settings
from core_backend.exceptions import (
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    ServiceError,
    TransientStoreError,
    ValidationError,
)
from inventory.services import InventoryService
from orders.models import Order, OrderItem
from payments.services import PaymentService
from products.services import ItemService
from .code_service import OrderCodeService
from .lifecycle_service import OrderLifecycleService

logger = logging.getLogger(__name__)

Status = Order.OrderStatus


class OrderService:
    """
    Order placement, payment confirmation and kitchen status updates.

    Each public operation is one database transaction: either every step
    (order row, lines, code allocation, stock reservation, payment record,
    status change) commits, or none does.
    """

    # --- Helpers ---

    @staticmethod
    def normalize_lines(lines):
        """
        Turns request lines into (item_id, quantity) pairs. Accepts dicts with
        item_id/quantity keys or 2-tuples.
        """
        if not lines:
            raise ValidationError("No items in order")

        normalized = []
        for line in lines:
            if isinstance(line, dict):
                item_id = line.get("item_id")
                quantity = line.get("quantity")
            else:
                try:
                    item_id, quantity = line
                except (TypeError, ValueError):
                    raise ValidationError(f"Malformed order line: {line!r}")
            if item_id is None:
                raise ValidationError("Every order line needs an item_id")
            try:
                item_id = int(item_id)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"Invalid item_id: {item_id!r}", details={"item_id": str(item_id)}
                )
            normalized.append((item_id, quantity))
        return normalized

    @staticmethod
    def _parse_order_id(order_id):
        try:
            return uuid.UUID(str(order_id))
        except (TypeError, ValueError):
            raise NotFoundError("Order not found", details={"order_id": str(order_id)})

    @staticmethod
    def _lock_order(order_id) -> Order:
        order = Order.objects.select_for_update().filter(pk=order_id).first()
        if order is None:
            raise NotFoundError("Order not found", details={"order_id": str(order_id)})
        return order

    @staticmethod
    def _create_order_row(now, **fields) -> Order:
        """
        Inserts the order under a freshly issued short code. A wrapped code
        can collide with one issued earlier the same day; the next code is
        tried a bounded number of times.
        """
        service_date = timezone.localdate(now)
        max_retries = app_settings.order_code_max_retries
        for attempt in range(1, max_retries + 1):
            short_code = OrderCodeService.next_code()
            try:
                with transaction.atomic():
                    return Order.objects.create(
                        short_code=short_code,
                        service_date=service_date,
                        created_at=now,
                        updated_at=now,
                        **fields,
                    )
            except IntegrityError:
                logger.warning(
                    f"Order code {short_code} already used on {service_date} "
                    f"(attempt {attempt}/{max_retries})"
                )
        raise ConflictError("Failed to allocate a unique order code after multiple retries.")

    # --- Placement ---

    @staticmethod
    def create_order(lines, payment_method, phone=None, now=None) -> Order:
        """
        Places an order in PENDING.

        - Every line must reference a known, available item with enough stock
          left (ValidationError for unknown/unavailable items, a conflict
          naming the item when stock is short).
        - Prices are snapshotted from the items into the order lines.
        - IN_PERSON orders hold their stock right away and expire after the
          pay-on-pickup window; ONLINE orders take stock only once paid.
        """
        if payment_method not in Order.PaymentMethod.values:
            raise ValidationError(
                f"'{payment_method}' is not a valid payment method.",
                details={"payment_method": payment_method},
            )

        merged = InventoryService.merge_lines(OrderService.normalize_lines(lines))
        items = ItemService.get_items_by_ids(merged.keys())

        total = 0
        for item_id, quantity in merged.items():
            item = items.get(item_id)
            if item is None:
                raise ValidationError(f"Item {item_id} not found", details={"item_id": item_id})
            if not item.is_available:
                raise ValidationError(
                    f"{item.name} is not on the menu",
                    details={"item_id": item.pk, "item_name": item.name},
                )
            if item.available_today < quantity:
                raise InsufficientStockError(item, quantity, item.available_today)
            total += item.price * quantity

        now = now or timezone.now()
        is_in_person = payment_method == Order.PaymentMethod.IN_PERSON
        expires_at = (
            now + timedelta(minutes=app_settings.pay_in_person_hold_minutes)
            if is_in_person
            else None
        )

        try:
            with transaction.atomic():
                order = OrderService._create_order_row(
                    now,
                    status=Status.PENDING,
                    payment_method=payment_method,
                    phone=phone or None,
                    total=total,
                    expires_at=expires_at,
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=order,
                            item=items[item_id],
                            quantity=quantity,
                            unit_price=items[item_id].price,
                        )
                        for item_id, quantity in merged.items()
                    ]
                )

                # Pay-on-pickup customers hold stock for the expiry window
                if is_in_person:
                    InventoryService.reserve(merged.items())
        except ServiceError:
            raise
        except DatabaseError as e:
            logger.error(f"Order creation failed in the database: {e}", exc_info=True)
            raise TransientStoreError("Failed to create order") from e

        logger.info(
            f"Created order {order.short_code} ({payment_method}) total={total} "
            f"lines={len(merged)}"
        )
        return order

    # --- Payment ---

    @staticmethod
    def confirm_payment(order_id, success, provider_ref=None, now=None, require_pending=False) -> Order:
        """
        Records a payment attempt and, when it succeeded, marks the order PAID.

        - A failed attempt is recorded and leaves the order untouched, so the
          customer can retry.
        - A successful attempt on a PENDING order records the payment, moves
          the order to PAID (paid_at, est_ready_at) and, for ONLINE orders,
          reserves stock, all in one transaction.
        - A successful attempt on an order that is already PAID or further
          along is recorded but changes nothing on the order.
        - With require_pending, a successful attempt on an order that is no
          longer PENDING is a conflict instead (kitchen "mark paid").
        """
        order_id = OrderService._parse_order_id(order_id)
        now = now or timezone.now()

        try:
            with transaction.atomic():
                order = OrderService._lock_order(order_id)

                if not success:
                    PaymentService.record_payment(order, False, provider_ref, now)
                    return order

                current = OrderLifecycleService.effective_status(order, now)
                if current in (Status.CANCELLED, Status.EXPIRED):
                    raise ConflictError(
                        f"Cannot take payment for order {order.short_code}: it is {current}.",
                        details={"status": current},
                    )

                if require_pending and current != Status.PENDING:
                    raise ConflictError(
                        f"Cannot change order {order.short_code} from {current} to PAID.",
                        details={"status": current},
                    )

                PaymentService.record_payment(order, True, provider_ref, now)

                if current != Status.PENDING:
                    logger.info(
                        f"Order {order.short_code} already {current}; payment recorded without changes"
                    )
                    return order

                lines = list(order.items.select_related("item"))
                OrderLifecycleService.transition(order, Status.PAID, now)

                # Pay-on-pickup orders reserved their stock at creation
                if order.payment_method == Order.PaymentMethod.ONLINE:
                    InventoryService.reserve((line.item_id, line.quantity) for line in lines)
        except ServiceError:
            raise
        except DatabaseError as e:
            logger.error(f"Payment confirmation failed in the database: {e}", exc_info=True)
            raise TransientStoreError("Payment confirmation failed") from e

        logger.info(f"Order {order.short_code} paid; ready around {order.est_ready_at}")
        return order

    # --- Lookup ---

    @staticmethod
    def get_order_by_code(code) -> Order:
        """
        The most recent order carrying this short code. Codes restart every
        day, so older days' orders with the same code are shadowed.
        """
        order = (
            Order.objects.filter(short_code=code)
            .prefetch_related("items__item")
            .order_by("-service_date", "-created_at")
            .first()
        )
        if order is None:
            raise NotFoundError("Order not found", details={"code": code})
        return order

    @staticmethod
    def get_order(order_id) -> Order:
        order_id = OrderService._parse_order_id(order_id)
        order = Order.objects.prefetch_related("items__item").filter(pk=order_id).first()
        if order is None:
            raise NotFoundError("Order not found", details={"order_id": str(order_id)})
        return order

    # --- Kitchen status updates ---

    # Targets the kitchen may ask for explicitly. EXPIRED is derived, never requested.
    KITCHEN_STATUS_TARGETS = (
        Status.PAID,
        Status.PREPARING,
        Status.READY,
        Status.PICKED_UP,
        Status.CANCELLED,
    )

    @staticmethod
    def update_status(code, new_status, now=None) -> Order:
        """
        Kitchen-facing status change, validated against the state machine.
        Marking an order PAID goes through confirm_payment so the payment is
        recorded and stock rules apply as for any other payment.
        """
        if new_status not in OrderService.KITCHEN_STATUS_TARGETS:
            raise ValidationError(
                f"'{new_status}' is not a supported status update.",
                details={"status": new_status},
            )

        now = now or timezone.now()
        order = OrderService.get_order_by_code(code)

        if new_status == Status.PAID:
            OrderLifecycleService.validate_transition(order, Status.PAID, now)
            return OrderService.confirm_payment(order.pk, success=True, now=now, require_pending=True)

        try:
            with transaction.atomic():
                order = OrderService._lock_order(order.pk)
                OrderLifecycleService.transition(order, new_status, now)
        except ServiceError:
            raise
        except DatabaseError as e:
            logger.error(f"Status update failed in the database: {e}", exc_info=True)
            raise TransientStoreError("Failed to update order") from e
        return order

    @staticmethod
    def advance_order(code, now=None) -> Order:
        """Moves the order exactly one step along PENDING -> ... -> PICKED_UP."""
        now = now or timezone.now()
        order = OrderService.get_order_by_code(code)
        current = OrderLifecycleService.effective_status(order, now)
        next_status = OrderLifecycleService.next_status(current)
        if next_status is None:
            raise ConflictError(
                f"Order {order.short_code} is {current} and cannot be advanced.",
                details={"status": current},
            )
        return OrderService.update_status(code, next_status, now)

    @staticmethod
    def cancel_order(code, now=None) -> Order:
        """Cancels a PENDING order. Held stock is not returned."""
        return OrderService.update_status(code, Status.CANCELLED, now)
