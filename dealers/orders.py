"""
Order placement and order management.

``place_order`` turns a cart snapshot into an Order whose lines never change
afterwards. The order and its lines are written in one transaction and the
cart is only emptied once that transaction has committed.
"""
import logging

from django.db import transaction
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from .exceptions import EmptyCartError, NotFoundError, ValidationError
from .models import Order, OrderItem, OrderStatus, OrderType, Product, Role
from .notifications import dispatch_order_notification
from .roles import has_role

logger = logging.getLogger(__name__)

DEALER_CANCELLABLE_STATUSES = (OrderStatus.PENDING, OrderStatus.FAILED)
WAREHOUSE_ORDER_LIMIT = 100


def place_order(cart, user, notes=''):
    snapshot = cart.list_items()
    if not snapshot.lines:
        raise EmptyCartError()

    products = Product.objects.in_bulk([line.product_id for line in snapshot.lines])

    with transaction.atomic():
        order = Order.objects.create(
            user=user,
            status=OrderStatus.PENDING,
            total=snapshot.total,
            customer_note=(notes or '').strip(),
            is_dealer_order=has_role(user, Role.DEALER),
        )
        for line in snapshot.lines:
            OrderItem.objects.create(
                order=order,
                product=products.get(line.product_id),
                product_name=line.name,
                sku=line.sku,
                quantity=line.quantity,
                unit_price=line.price,
                line_total=line.subtotal,
                order_type=line.order_type,
            )
        transaction.on_commit(lambda: dispatch_order_notification(order.pk))

    cart.clear()
    logger.info(
        "Order %s placed by %s: %s line(s), total %s",
        order.pk, user, len(snapshot.lines), order.total,
    )
    return order


def get_order(order_id):
    try:
        return Order.objects.select_related('user').get(pk=int(order_id))
    except (Order.DoesNotExist, TypeError, ValueError):
        raise NotFoundError("Order not found.")


def orders_for_user(user):
    return _with_item_counts(Order.objects.filter(user=user))


def search_orders(search='', status='all', limit=WAREHOUSE_ORDER_LIMIT):
    orders = _with_item_counts(Order.objects.select_related('user'))

    if status and status != 'all':
        if status not in OrderStatus.values:
            raise ValidationError(f"Unknown order status: {status}")
        orders = orders.filter(status=status)

    term = (search or '').strip()
    if term:
        match = (
            Q(user__username__icontains=term)
            | Q(user__email__icontains=term)
            | Q(user__first_name__icontains=term)
            | Q(user__last_name__icontains=term)
            | Q(user__dealer_profile__dealer_company_name__icontains=term)
        )
        order_number = term.lstrip('#')
        if order_number.isdigit():
            match |= Q(pk=int(order_number))
        orders = orders.filter(match)

    return orders[:limit]


def update_status(order, status):
    if status not in OrderStatus.values:
        raise ValidationError("Invalid status.")
    previous = order.status
    order.status = status
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Order %s status changed: %s -> %s", order.pk, previous, status)
    return order


def cancel_by_dealer(order, user):
    """The only status change a dealer may make to their own order."""
    if order.user_id != user.pk:
        raise NotFoundError("Order not found.")
    if order.status not in DEALER_CANCELLABLE_STATUSES:
        raise ValidationError(f"Order #{order.pk} can no longer be cancelled.")
    return update_status(order, OrderStatus.CANCELLED)


def status_choices():
    return dict(OrderStatus.choices)


def serialize_order(order, with_items=False):
    user = order.user
    items_count = getattr(order, 'items_count', None)
    if items_count is None:
        items_count = sum(item.quantity for item in order.items.all())

    data = {
        'id': order.pk,
        'status': order.status,
        'status_name': order.get_status_display(),
        'date': timezone.localtime(order.created_at).strftime('%Y-%m-%d %H:%M'),
        'total': f"{order.total:.2f}",
        'customer': order.customer_name,
        'email': user.email if user else '',
        'items_count': items_count,
    }
    if with_items:
        data['items'] = [
            {
                'name': item.product_name,
                'sku': item.sku,
                'quantity': item.quantity,
                'price': float(item.unit_price),
                'total': float(item.line_total),
                'order_type': item.order_type,
                'order_type_label': OrderType(item.order_type).label,
            }
            for item in order.items.all()
        ]
        data['notes'] = order.customer_note
        data['phone'] = _contact_phone(user)
    return data


def _with_item_counts(orders):
    return orders.annotate(items_count=Coalesce(Sum('items__quantity'), 0))


def _contact_phone(user):
    profile = getattr(user, 'dealer_profile', None) if user else None
    if profile is None:
        return ''
    for field in ('parts_manager_phone', 'accounts_payable_phone', 'parts_group_phone'):
        value = getattr(profile, field)
        if value:
            return value
    return ''
