from .models import Item


class ItemService:
    """Read-side helpers for the menu."""

    @staticmethod
    def get_menu_items():
        """
        Items a customer can order right now: on the menu and not sold out,
        alphabetically.
        """
        return Item.objects.filter(is_available=True, available_today__gt=0).order_by("name")

    @staticmethod
    def get_items_by_ids(item_ids):
        """Returns a dict of id -> Item for the given ids. Missing ids are simply absent."""
        return Item.objects.in_bulk(list(item_ids))
