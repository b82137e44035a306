import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from dealers import orders as order_service
from dealers.models import Order, OrderStatus

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Cancel unpaid pending orders older than the hold window. Dealer orders are never touched."

    def add_arguments(self, parser):
        parser.add_argument(
            '--minutes',
            type=int,
            default=None,
            help="Hold window in minutes (defaults to DEALER_HOLD_STOCK_MINUTES).",
        )

    def handle(self, *args, **options):
        minutes = options['minutes'] or settings.DEALER_HOLD_STOCK_MINUTES
        cancelled = 0
        for order in Order.objects.expired_unpaid(minutes):
            order_service.update_status(order, OrderStatus.CANCELLED)
            cancelled += 1
        logger.info("Cancelled %s unpaid order(s) older than %s minutes", cancelled, minutes)
        self.stdout.write(f"Cancelled {cancelled} unpaid order(s).")
