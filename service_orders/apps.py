# service_orders/apps.py

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class ServiceOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "service_orders"
    verbose_name = "Service orders"

    def ready(self):
        # Register Django system checks only
        try:
            from . import checks  # noqa
        except Exception as exc:
            logger.warning(
                "Service order policy checks not registered: %s",
                exc,
            )
