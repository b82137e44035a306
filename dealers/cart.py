# dealers/cart.py
"""
Session-backed dealer cart.

Each line is keyed by product + order type and stores the unit price that
was resolved when the line was created. Re-adding the same product with the
same order type merges into the existing line at its original price.
"""
import hashlib
import logging
from collections import namedtuple
from contextlib import contextmanager
from decimal import Decimal

from django.contrib.sessions.backends.db import SessionStore as DatabaseSession
from django.contrib.sessions.models import Session
from django.db import transaction

from . import pricing
from .exceptions import NotFoundError, ValidationError
from .models import OrderType, Product

logger = logging.getLogger(__name__)


class CartLine(namedtuple('CartLine', [
        'key', 'product_id', 'name', 'sku', 'quantity', 'order_type', 'price'])):
    __slots__ = ()

    @property
    def subtotal(self):
        return (self.price * self.quantity).quantize(Decimal('0.01'))

    @property
    def order_type_label(self):
        return OrderType(self.order_type).label

    def as_dict(self):
        return {
            'key': self.key,
            'id': self.product_id,
            'name': self.name,
            'sku': self.sku,
            'price': float(self.price),
            'quantity': self.quantity,
            'subtotal': float(self.subtotal),
            'orderType': self.order_type,
            'orderTypeLabel': self.order_type_label,
        }


CartSnapshot = namedtuple('CartSnapshot', ['lines', 'total'])


def coerce_quantity(value):
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, quantity)


def line_key(product_id, order_type):
    return hashlib.md5(f"{product_id}:{order_type}".encode()).hexdigest()


@contextmanager
def session_lock(session):
    """
    Apply cart changes from concurrent requests of one session in turn.

    Holds a row lock on the stored session, re-reads its data under the lock
    and writes it back before the lock is released. Sessions that are not
    stored in the database, or not stored yet, are yielded as they are.
    """
    key = session.session_key
    if key is None or not isinstance(session, DatabaseSession):
        yield session
        return

    try:
        with transaction.atomic():
            locked = Session.objects.select_for_update().filter(session_key=key)
            list(locked.values_list('pk', flat=True))
            current = session.load()
            session.clear()
            session.update(current)
            yield session
            session.save()
    finally:
        # Saving again after the response would undo a later request.
        session.modified = False


class Cart:
    SESSION_KEY = 'cart'

    def __init__(self, session):
        self.session = session

    def _lines(self):
        return dict(self.session.get(self.SESSION_KEY) or {})

    def _save(self, lines):
        self.session[self.SESSION_KEY] = lines
        self.session.modified = True

    def __len__(self):
        return len(self._lines())

    def is_empty(self):
        return len(self) == 0

    def add_item(self, product_id, quantity=1, order_type=OrderType.STOCK):
        quantity = coerce_quantity(quantity)
        order_type = OrderType.normalize(order_type)

        try:
            product = Product.objects.get(pk=int(product_id), is_published=True)
        except (Product.DoesNotExist, TypeError, ValueError):
            raise NotFoundError("Product not found.")

        resolved = pricing.resolve(product, order_type)
        if not resolved.is_priced:
            raise ValidationError(
                f"{product.name} has no {order_type.label} price and cannot be ordered."
            )

        key = line_key(product.pk, order_type.value)
        lines = self._lines()
        if key in lines:
            line = dict(lines[key])
            line['quantity'] += quantity
        else:
            line = {
                'product_id': product.pk,
                'name': product.name,
                'sku': product.sku,
                'quantity': quantity,
                'order_type': order_type.value,
                'price': str(resolved.amount),
            }
        lines[key] = line
        self._save(lines)

        logger.info(
            "Cart add: product %s (%s) x%s as %s at %s",
            product.pk, product.sku, quantity, order_type.value, line['price'],
        )
        return key

    def update_quantity(self, key, quantity):
        lines = self._lines()
        if key not in lines:
            raise NotFoundError("Cart item not found.")
        line = dict(lines[key])
        line['quantity'] = coerce_quantity(quantity)
        lines[key] = line
        self._save(lines)
        return self._line(key, line)

    def remove_item(self, key):
        lines = self._lines()
        if key not in lines:
            raise NotFoundError("Cart item not found.")
        del lines[key]
        self._save(lines)

    def list_items(self):
        lines = [self._line(key, data) for key, data in self._lines().items()]
        total = sum((line.subtotal for line in lines), Decimal('0.00'))
        return CartSnapshot(lines, total)

    def count(self):
        return sum(int(line['quantity']) for line in self._lines().values())

    def clear(self):
        self._save({})

    @staticmethod
    def _line(key, data):
        return CartLine(
            key=key,
            product_id=data['product_id'],
            name=data['name'],
            sku=data['sku'],
            quantity=int(data['quantity']),
            order_type=data['order_type'],
            price=Decimal(data['price']),
        )
