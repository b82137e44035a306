from decimal import Decimal

import pytest
from django.urls import reverse

from dealers.dealer_utils import home_url_for
from django.contrib.staticfiles import finders

from dealers.models import Order, OrderStatus, Role
from dealers.roles import can_manage_orders, can_shop, can_use_admin, role_for


# -------------------------------
# Roles
# -------------------------------
def test_roles(dealer, warehouse_manager, administrator, make_user):
    nobody = make_user("nobody")

    assert role_for(dealer) == Role.DEALER
    assert role_for(warehouse_manager) == Role.WAREHOUSE_MANAGER
    assert role_for(administrator) == Role.ADMINISTRATOR
    assert role_for(nobody) is None

    assert can_shop(dealer) and not can_manage_orders(dealer)
    assert can_manage_orders(warehouse_manager) and not can_shop(warehouse_manager)
    assert can_shop(administrator) and can_manage_orders(administrator)
    assert can_use_admin(administrator) and not can_use_admin(dealer)
    assert not can_shop(nobody) and not can_manage_orders(nobody)


def test_dealer_profile_created_for_dealers_only(dealer, warehouse_manager):
    assert dealer.dealer_profile.pk is not None
    assert not hasattr(warehouse_manager, 'dealer_profile')


def test_home_urls(dealer, warehouse_manager, administrator, make_user):
    owner = make_user("owner", Role.ADMINISTRATOR)

    assert home_url_for(dealer) == reverse('inventory')
    assert home_url_for(warehouse_manager) == reverse('warehouse_orders')
    assert home_url_for(administrator) == reverse('admin:index')
    assert home_url_for(owner) == reverse('inventory')


# -------------------------------
# Forced login
# -------------------------------
@pytest.mark.parametrize("name", ['inventory', 'cart', 'checkout', 'my_orders', 'account', 'warehouse_orders'])
def test_anonymous_pages_redirect_to_login(client, db, name):
    response = client.get(reverse(name))
    assert response.status_code == 302
    assert response.url == reverse('login')


def test_login_page_is_open(client, db):
    assert client.get(reverse('login')).status_code == 200


@pytest.mark.parametrize("fixture, target", [
    ('dealer', 'inventory'),
    ('warehouse_manager', 'warehouse_orders'),
])
def test_login_redirects_by_role(client, request, fixture, target):
    user = request.getfixturevalue(fixture)
    response = client.post(reverse('login'), {'username': user.username, 'password': 'secret-pass-123'})
    assert response.status_code == 302
    assert response.url == reverse(target)


def test_administrator_login_goes_to_admin(client, administrator):
    response = client.post(reverse('login'), {'username': 'boss', 'password': 'secret-pass-123'})
    assert response.url == reverse('admin:index')


def test_dealer_is_kept_out_of_admin(dealer_client):
    response = dealer_client.get('/admin/')
    assert response.status_code == 302
    assert response.url == reverse('inventory')


# -------------------------------
# Logout
# -------------------------------
def test_logout_requires_token(dealer_client, dealer, nonce):
    response = dealer_client.get(reverse('logout'))
    assert response.url == reverse('inventory')
    assert '_auth_user_id' in dealer_client.session

    response = dealer_client.get(reverse('logout'), {'_nonce': nonce(dealer, 'dealer_logout')})
    assert response.url == reverse('login')
    assert '_auth_user_id' not in dealer_client.session


# -------------------------------
# Pages
# -------------------------------
def test_dealer_pages_render(dealer_client, make_product):
    make_product(name="Brake pad")
    for name in ('inventory', 'cart', 'my_orders', 'account'):
        response = dealer_client.get(reverse(name))
        assert response.status_code == 200, name
        assert b'portal-config' in response.content


@pytest.mark.parametrize("name", ['inventory', 'account'])
def test_pages_mount_the_portal_script(dealer_client, name):
    content = dealer_client.get(reverse(name)).content.decode()

    assert f'data-portal-page="{name}"' in content
    assert 'dealers/portal.js' in content
    assert finders.find('dealers/portal.js')


def test_cart_page_has_line_controls(dealer_client, dealer, make_product, nonce):
    product = make_product(name="Fuel pump", price='20.00')
    dealer_client.post(reverse('ajax_add_to_cart'), {
        'product_id': product.pk, 'nonce': nonce(dealer, 'dealer_add_to_cart'),
    })

    content = dealer_client.get(reverse('cart')).content.decode()

    assert 'data-portal-page="cart"' in content
    assert 'name="quantity"' in content
    assert 'data-remove' in content
    assert 'data-cart-total' in content


def test_only_cancellable_orders_offer_cancel(dealer_client, dealer):
    pending = Order.objects.create(user=dealer)
    shipped = Order.objects.create(user=dealer, status=OrderStatus.COMPLETED)

    content = dealer_client.get(reverse('my_orders')).content.decode()

    assert f'data-cancel-order="{pending.pk}"' in content
    assert f'data-cancel-order="{shipped.pk}"' not in content


def test_checkout_with_empty_cart_redirects(dealer_client):
    response = dealer_client.get(reverse('checkout'))
    assert response.status_code == 302
    assert response.url == reverse('inventory')


def test_checkout_renders_cart_lines(dealer_client, dealer, make_product, nonce):
    product = make_product(name="Timing belt", price='30.00')
    dealer_client.post(reverse('ajax_add_to_cart'), {
        'product_id': product.pk, 'quantity': 2, 'order_type': 'vor_order',
        'nonce': nonce(dealer, 'dealer_add_to_cart'),
    })

    response = dealer_client.get(reverse('checkout'))

    assert response.status_code == 200
    assert b"Timing belt" in response.content
    assert b"VOR Order" in response.content
    assert b"$60.00" in response.content
    assert b'id="place-order"' in response.content


def test_warehouse_manager_is_sent_to_console(warehouse_client):
    response = warehouse_client.get(reverse('inventory'))
    assert response.url == reverse('warehouse_orders')
    response = warehouse_client.get(reverse('my_orders'))
    assert response.url == reverse('warehouse_orders')


def test_dealer_is_sent_home_from_console(dealer_client):
    response = dealer_client.get(reverse('warehouse_orders'))
    assert response.url == reverse('inventory')


def test_warehouse_pages_render(warehouse_client, dealer):
    order = Order.objects.create(user=dealer, total=Decimal('12.00'))
    response = warehouse_client.get(reverse('warehouse_orders'))
    assert response.status_code == 200
    assert b'data-portal-page="warehouse-orders"' in response.content
    response = warehouse_client.get(reverse('warehouse_order_detail', args=[order.pk]))
    assert response.status_code == 200
    assert f"Order #{order.pk}".encode() in response.content
    assert b'data-portal-page="warehouse-order-detail"' in response.content
    assert warehouse_client.get(reverse('warehouse_order_detail', args=[999])).status_code == 404


def test_user_without_role_sees_no_access(client, make_user):
    client.force_login(make_user("nobody"))
    response = client.get(reverse('inventory'))
    assert response.status_code == 403
