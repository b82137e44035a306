"""Order-type price resolution.

A product carries one price per order type plus a base price. The price
for a line is the first positive value in ``price_sources``; a product with
no positive source is *unpriced* and resolves to ``0.00``, which callers
must treat as missing rather than free.
"""
from collections import namedtuple
from decimal import Decimal, InvalidOperation

from .models import OrderType

ZERO = Decimal('0.00')

class ResolvedPrice(namedtuple('ResolvedPrice', ['amount', 'source'])):
    __slots__ = ()

    @property
    def is_priced(self):
        return self.source is not None


def _to_decimal(value):
    if value is None or value == '':
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def price_sources(product, order_type):
    """Ordered (source, value) pairs consulted for ``order_type``."""
    return [
        ('tier', product.tier_price(order_type)),
        ('base', product.price),
    ]


def resolve(product, order_type):
    for source, value in price_sources(product, order_type):
        amount = _to_decimal(value)
        if amount is not None and amount > 0:
            return ResolvedPrice(amount.quantize(ZERO), source)
    return ResolvedPrice(ZERO, None)


def resolve_price(product, order_type):
    return resolve(product, order_type).amount


def tier_prices(product):
    return {order_type.value: resolve_price(product, order_type) for order_type in OrderType}
