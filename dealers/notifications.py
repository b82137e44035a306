import logging
import threading

from anymail.message import AnymailMessage
from django.conf import settings
from django.template.loader import render_to_string

from .models import Order
from .roles import warehouse_managers

logger = logging.getLogger(__name__)


def warehouse_recipients():
    """Emails of active warehouse managers, de-duplicated case-insensitively."""
    seen = set()
    recipients = []
    for email in warehouse_managers().order_by('pk').values_list('email', flat=True):
        email = (email or '').strip()
        if email and email.lower() not in seen:
            recipients.append(email)
            seen.add(email.lower())
    return recipients


def notify_warehouse_managers(order_id):
    try:
        order = Order.objects.select_related('user').get(pk=order_id)
        recipients = warehouse_recipients()
        if not recipients:
            logger.warning("No warehouse managers to notify for order %s", order_id)
            return

        ctx = {
            "order": order,
            "items": order.items.all(),
            "site_url": settings.DEALER_SITE_URL,
        }
        plain = render_to_string("dealers/emails/new_order.txt", ctx)
        html = render_to_string("dealers/emails/new_order.html", ctx)

        msg = AnymailMessage(
            subject=f"New dealer order #{order.id} from {order.customer_name}",
            body=plain,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=recipients,
        )
        msg.attach_alternative(html, "text/html")
        msg.send()
        logger.info("Warehouse notification sent for order %s to %s", order_id, recipients)

    except Exception:
        logger.exception("Warehouse notification failed for order %s", order_id)


def dispatch_order_notification(order_id):
    """Send the warehouse notification in the background unless disabled."""
    if not settings.DEALER_NOTIFY_ASYNC:
        notify_warehouse_managers(order_id)
        return
    try:
        threading.Thread(target=notify_warehouse_managers, args=(order_id,), daemon=True).start()
    except Exception:
        logger.exception("Failed to start notification thread for order %s", order_id)
