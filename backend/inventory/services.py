from collections import OrderedDict
from django.db import transaction
from django.db.models import F
import logging

from core_backend.exceptions import InsufficientStockError, ValidationError
from products.models import Item

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Daily stock ledger for menu items.

    Stock lives on Item.available_today. It only ever goes down here; the
    morning reset back to daily_quantity is done outside the application.
    """

    @staticmethod
    def check_availability(item_id, quantity) -> bool:
        """
        True iff the item exists, is on the menu and has at least `quantity`
        units left. This is a plain read; reserve() re-checks at decrement time.
        """
        try:
            item_id = int(item_id)
        except (TypeError, ValueError):
            return False
        return Item.objects.filter(
            pk=item_id,
            is_available=True,
            available_today__gte=quantity,
        ).exists()

    @staticmethod
    def merge_lines(lines):
        """
        Collapse (item_id, quantity) pairs so each item is decremented once.
        Keeps first-seen order so the reported conflict is deterministic.
        """
        merged = OrderedDict()
        for item_id, quantity in lines:
            try:
                item_id = int(item_id)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"Invalid item_id: {item_id!r}", details={"item_id": str(item_id)}
                )
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise ValidationError(
                    f"Quantity for item {item_id} must be a positive integer",
                    details={"item_id": item_id},
                )
            merged[item_id] = merged.get(item_id, 0) + quantity
        return merged

    @staticmethod
    @transaction.atomic
    def reserve(lines):
        """
        Atomically decrements available_today for every (item_id, quantity) line.

        All-or-nothing: each decrement is a conditional UPDATE that only
        matches while enough stock remains, so a concurrent reservation that
        got there first makes this one fail instead of overselling. Any
        failure raises InsufficientStockError and rolls back every decrement
        made in this block.
        """
        merged = InventoryService.merge_lines(lines)
        if not merged:
            raise ValidationError("Nothing to reserve")

        for item_id, quantity in merged.items():
            updated = Item.objects.filter(
                pk=item_id,
                available_today__gte=quantity,
            ).update(available_today=F("available_today") - quantity)

            if updated == 0:
                item = Item.objects.filter(pk=item_id).first()
                if item is None:
                    raise ValidationError(
                        f"Item {item_id} does not exist",
                        details={"item_id": item_id},
                    )
                logger.warning(
                    f"Reservation rejected for {item.name}: requested {quantity}, "
                    f"available {item.available_today}"
                )
                raise InsufficientStockError(item, quantity, item.available_today)

        logger.info(
            "Reserved stock: "
            + ", ".join(f"item {item_id} x{quantity}" for item_id, quantity in merged.items())
        )
        return merged

    @staticmethod
    def get_remaining(item_id) -> int:
        return Item.objects.values_list("available_today", flat=True).get(pk=item_id)
