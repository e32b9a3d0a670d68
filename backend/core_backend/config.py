"""
Centralized access to the stand's tunables.

Business logic reads configuration through `app_settings` instead of
touching django.conf.settings directly, so defaults live in one place and
tests can override values with `override_settings` + `app_settings.reload()`.
"""

from typing import Any, Optional
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
import logging

logger = logging.getLogger(__name__)


class AppSettings:
    """
    A LAZY singleton over django.conf.settings. Values are resolved on first
    attribute access so importing this module never requires configured settings.
    """

    _instance: Optional["AppSettings"] = None

    DEFAULTS = {
        "kitchen_parallelism": ("KITCHEN_PARALLELISM", 2),
        "pay_in_person_hold_minutes": ("PAY_IN_PERSON_HOLD_MINUTES", 15),
        "order_code_prefix": ("ORDER_CODE_PREFIX", "8AM-"),
        "order_code_width": ("ORDER_CODE_WIDTH", 3),
        "order_code_modulus": ("ORDER_CODE_MODULUS", 1000),
        "order_code_max_retries": ("ORDER_CODE_MAX_RETRIES", 5),
        "order_status_poll_seconds": ("ORDER_STATUS_POLL_SECONDS", 30),
        "kitchen_poll_seconds": ("KITCHEN_POLL_SECONDS", 10),
    }

    def __new__(cls) -> "AppSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def _setup(self):
        if not self._initialized:
            self.load_settings()
            self._initialized = True

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if not self._initialized:
            self._setup()
        try:
            return self.__dict__[name]
        except KeyError:
            raise AttributeError(f"'AppSettings' object has no attribute '{name}'")

    def load_settings(self) -> None:
        for attr, (setting_name, default) in self.DEFAULTS.items():
            self.__dict__[attr] = getattr(settings, setting_name, default)

        if self.__dict__["kitchen_parallelism"] < 1:
            raise ImproperlyConfigured("KITCHEN_PARALLELISM must be at least 1")
        if self.__dict__["order_code_modulus"] < 2:
            raise ImproperlyConfigured("ORDER_CODE_MODULUS must be at least 2")

        logger.debug(
            f"Loaded stand settings: parallelism={self.__dict__['kitchen_parallelism']}, "
            f"hold={self.__dict__['pay_in_person_hold_minutes']}min"
        )

    def reload(self) -> None:
        """Re-read values from django.conf.settings."""
        for attr in self.DEFAULTS:
            self.__dict__.pop(attr, None)
        self._initialized = False
        self._setup()


app_settings = AppSettings()
