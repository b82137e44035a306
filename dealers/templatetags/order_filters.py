from decimal import Decimal, InvalidOperation

from django import template

from dealers.models import OrderType

register = template.Library()


@register.filter
def money(value):
    try:
        return f"${Decimal(str(value)):,.2f}"
    except (InvalidOperation, ValueError, TypeError):
        return "$0.00"


@register.filter
def order_type_label(value):
    return OrderType.normalize(value).label
