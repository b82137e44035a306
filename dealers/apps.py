from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class DealersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dealers"
    verbose_name = "Dealer Portal"

    def ready(self):
        """
        Hook up signal handlers that keep portal records in step with users.
        """
        from . import signals  # noqa: F401

        logger.debug("Dealer portal signal handlers registered.")
