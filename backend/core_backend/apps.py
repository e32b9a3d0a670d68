from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """
        Validate stand configuration at startup so a bad KITCHEN_PARALLELISM
        or code modulus fails fast instead of on the first order.
        """
        from core_backend.config import app_settings

        app_settings.reload()
        logger.debug(
            f"Stand configuration ready: kitchen parallelism {app_settings.kitchen_parallelism}, "
            f"codes {app_settings.order_code_prefix}<{app_settings.order_code_width} digits>"
        )
