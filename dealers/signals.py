import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import DealerProfile, PortalAccount, Role

logger = logging.getLogger(__name__)


@receiver(post_save, sender=PortalAccount)
def ensure_dealer_profile(sender, instance, **kwargs):
    """Every dealer account gets an (initially blank) dealer profile."""
    if instance.role != Role.DEALER:
        return
    _, created = DealerProfile.objects.get_or_create(user=instance.user)
    if created:
        logger.info("Created dealer profile for %s", instance.user)
