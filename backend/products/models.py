from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Item(models.Model):
    """
    A menu item sold at the stand, together with its daily stock counter.

    Prices are stored as integers in minor-currency units (kobo) so totals
    never go through floating point.
    """

    name = models.CharField(max_length=200, help_text=_("Name shown on the menu."))
    price = models.PositiveIntegerField(
        help_text=_("Unit price in minor-currency units (e.g. kobo)."),
    )
    prep_time_sec = models.PositiveIntegerField(
        help_text=_("Kitchen preparation time for one unit, in seconds."),
    )
    daily_quantity = models.PositiveIntegerField(
        default=0,
        help_text=_("How many units the stand prepares per day."),
    )
    available_today = models.PositiveIntegerField(
        default=0,
        help_text=_("Units still available today. Reset each morning."),
    )
    is_available = models.BooleanField(
        default=True,
        help_text=_("Whether the item is on the menu at all."),
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = _("Item")
        verbose_name_plural = _("Items")
        indexes = [
            models.Index(fields=["is_available", "available_today"], name="item_avail_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(available_today__lte=F("daily_quantity")),
                name="item_available_within_daily_quantity",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.available_today}/{self.daily_quantity} left)"

    @property
    def is_sold_out(self):
        return self.available_today == 0
