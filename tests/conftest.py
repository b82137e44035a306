from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.contrib.auth import get_user_model
from django.contrib.sessions.backends.db import SessionStore

from dealers.cart import Cart
from dealers.models import PortalAccount, Product, Role
from dealers.nonces import create_nonce


@pytest.fixture(autouse=True)
def portal_settings(settings):
    settings.DEALER_NOTIFY_ASYNC = False
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.DEALER_SEARCH_PAGE_SIZE = 50
    return settings


@pytest.fixture
def make_user(db):
    User = get_user_model()

    def _make(username, role=None, email=None, **extra):
        user = User.objects.create_user(
            username=username,
            email=email if email is not None else f"{username}@example.com",
            password="secret-pass-123",
            **extra,
        )
        if role is not None:
            PortalAccount.objects.create(user=user, role=role)
        return user
    return _make


@pytest.fixture
def dealer(make_user):
    return make_user("dealer1", Role.DEALER, first_name="Dana", last_name="Dealer")


@pytest.fixture
def other_dealer(make_user):
    return make_user("dealer2", Role.DEALER)


@pytest.fixture
def warehouse_manager(make_user):
    return make_user("warehouse1", Role.WAREHOUSE_MANAGER)


@pytest.fixture
def administrator(make_user):
    return make_user("boss", is_staff=True, is_superuser=True)


@pytest.fixture
def make_product(db):
    counter = {'n': 0}

    def _make(name=None, sku=None, price='10.00', **extra):
        counter['n'] += 1
        return Product.objects.create(
            name=name or f"Product {counter['n']}",
            sku=sku or f"SKU-{counter['n']:04d}",
            price=Decimal(price) if price is not None else None,
            stock_quantity=extra.pop('stock_quantity', 25),
            **extra,
        )
    return _make


@pytest.fixture
def session(db):
    return SessionStore()


@pytest.fixture
def cart(session):
    return Cart(session)


@pytest.fixture
def nonce():
    def _nonce(user, action):
        return create_nonce(SimpleNamespace(user=user), action)
    return _nonce


@pytest.fixture
def dealer_client(client, dealer):
    client.force_login(dealer)
    return client


@pytest.fixture
def warehouse_client(client, warehouse_manager):
    client.force_login(warehouse_manager)
    return client
