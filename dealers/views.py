import logging

from django.contrib import messages
from django.contrib.auth import logout
from django.contrib.auth.views import LoginView
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render, reverse

from . import orders as order_service
from .cart import Cart, session_lock
from .dealer_utils import home_url_for, json_success
from .decorators import ajax_endpoint, page_for
from .exceptions import ValidationError
from .models import DealerProfile, Order, OrderType
from .nonces import nonces_for, verify_nonce
from .roles import can_manage_orders, can_shop, is_dealer
from .search import search

logger = logging.getLogger(__name__)


# -------------------------------
# Login / Logout
# -------------------------------
class PortalLoginView(LoginView):
    template_name = 'dealers/login.html'
    redirect_authenticated_user = True

    def get_success_url(self):
        return self.get_redirect_url() or home_url_for(self.request.user)


def logout_view(request):
    """Instant logout from the header link; the link carries a signed token."""
    if verify_nonce(request, 'dealer_logout', request.GET.get('_nonce')):
        logger.info("User %s logged out", request.user)
        logout(request)
        return redirect('login')
    return redirect(home_url_for(request.user))


# -------------------------------
# Dealer pages
# -------------------------------
@page_for(can_shop)
def inventory(request):
    tokens = nonces_for(request, 'dealer_search_products', 'dealer_add_to_cart')
    config = {
        'ajaxUrls': {
            'search': reverse('ajax_search_products'),
            'addToCart': reverse('ajax_add_to_cart'),
        },
        'cartUrl': reverse('cart'),
        'searchNonce': tokens['dealer_search_products'],
        'addToCartNonce': tokens['dealer_add_to_cart'],
        'orderTypes': dict(OrderType.choices),
    }
    return render(request, 'dealers/inventory.html', {'config': config})


@page_for(can_shop)
def cart_view(request):
    snapshot = Cart(request.session).list_items()
    config = {
        'items': [line.as_dict() for line in snapshot.lines],
        'total': float(snapshot.total),
        'checkoutUrl': reverse('checkout'),
        'ajaxUrls': {
            'update': reverse('ajax_update_cart_item'),
            'remove': reverse('ajax_remove_from_cart'),
        },
        'nonce': nonces_for(request, 'dealer_update_cart')['dealer_update_cart'],
    }
    return render(request, 'dealers/cart.html', {
        'config': config,
        'cart_items': snapshot.lines,
        'total_price': snapshot.total,
    })


@page_for(can_shop)
def checkout(request):
    snapshot = Cart(request.session).list_items()
    if not snapshot.lines:
        messages.info(request, "Your cart is empty.")
        return redirect('inventory')

    config = {
        'items': [line.as_dict() for line in snapshot.lines],
        'total': float(snapshot.total),
        'cartUrl': reverse('cart'),
        'ajaxUrl': reverse('ajax_place_order'),
        'placeOrderNonce': nonces_for(request, 'dealer_place_order')['dealer_place_order'],
    }
    return render(request, 'dealers/checkout.html', {
        'config': config,
        'cart_items': snapshot.lines,
        'total_price': snapshot.total,
    })


def my_orders(request):
    if can_manage_orders(request.user) and not can_shop(request.user):
        return redirect('warehouse_orders')

    orders = order_service.orders_for_user(request.user)
    tokens = nonces_for(request, 'dealer_get_orders', 'dealer_cancel_order')
    config = {
        'ajaxUrls': {
            'orders': reverse('ajax_get_orders'),
            'cancel': reverse('ajax_cancel_order'),
        },
        'nonce': tokens['dealer_get_orders'],
        'cancelNonce': tokens['dealer_cancel_order'],
    }
    return render(request, 'dealers/my_orders.html', {
        'orders': orders,
        'cancellable_statuses': order_service.DEALER_CANCELLABLE_STATUSES,
        'config': config,
        'placed_order_id': request.GET.get('placed'),
    })


@page_for(is_dealer)
def account(request):
    tokens = nonces_for(request, 'dealer_get_account', 'dealer_update_account')
    config = {
        'ajaxUrls': {
            'get': reverse('ajax_get_account'),
            'update': reverse('ajax_update_account'),
        },
        'nonce': tokens['dealer_get_account'],
        'updateNonce': tokens['dealer_update_account'],
    }
    return render(request, 'dealers/account.html', {'config': config})


# -------------------------------
# Warehouse pages
# -------------------------------
def _warehouse_config(request):
    tokens = nonces_for(
        request,
        'warehouse_get_orders',
        'warehouse_get_order_detail',
        'warehouse_update_order_status',
    )
    return {
        'ajaxUrls': {
            'orders': reverse('ajax_warehouse_orders'),
            'detail': reverse('ajax_warehouse_order_detail'),
            'updateStatus': reverse('ajax_warehouse_update_status'),
        },
        'ordersNonce': tokens['warehouse_get_orders'],
        'detailNonce': tokens['warehouse_get_order_detail'],
        'updateNonce': tokens['warehouse_update_order_status'],
        'ordersPageUrl': reverse('warehouse_orders'),
    }


@page_for(can_manage_orders)
def warehouse_orders(request):
    return render(request, 'dealers/warehouse_orders.html', {
        'config': _warehouse_config(request),
    })


@page_for(can_manage_orders)
def warehouse_order_detail(request, order_id):
    order = get_object_or_404(Order, pk=order_id)
    config = _warehouse_config(request)
    config['orderId'] = order.pk
    return render(request, 'dealers/warehouse_order_detail.html', {
        'order': order,
        'config': config,
    })


# -------------------------------
# Inventory & cart endpoints
# -------------------------------
@ajax_endpoint('dealer_search_products', allowed=can_shop)
def ajax_search_products(request):
    result = search(request.POST.get('search', ''), request.POST.get('page', 1))
    return json_success({
        'products': result.items,
        'total': result.total,
        'page': result.page,
        'total_pages': result.total_pages,
        'has_more': result.has_more,
    })


@ajax_endpoint('dealer_add_to_cart', allowed=can_shop)
def ajax_add_to_cart(request):
    with session_lock(request.session) as session:
        cart = Cart(session)
        key = cart.add_item(
            request.POST.get('product_id'),
            request.POST.get('quantity', 1),
            request.POST.get('order_type', OrderType.STOCK),
        )
    return json_success({'cart_item_key': key, 'cart_count': cart.count()})


@ajax_endpoint('dealer_update_cart', allowed=can_shop)
def ajax_update_cart_item(request):
    with session_lock(request.session) as session:
        cart = Cart(session)
        line = cart.update_quantity(
            request.POST.get('cart_item_key', ''),
            request.POST.get('quantity', 1),
        )
    return json_success({
        'cart_count': cart.count(),
        'quantity': line.quantity,
        'subtotal': float(line.subtotal),
        'total': float(cart.list_items().total),
    })


@ajax_endpoint('dealer_update_cart', allowed=can_shop)
def ajax_remove_from_cart(request):
    with session_lock(request.session) as session:
        cart = Cart(session)
        cart.remove_item(request.POST.get('cart_item_key', ''))
    return json_success({
        'cart_count': cart.count(),
        'total': float(cart.list_items().total),
    })


# -------------------------------
# Orders
# -------------------------------
@ajax_endpoint('dealer_place_order', allowed=can_shop)
def ajax_place_order(request):
    # A repeated submit finds the cart already emptied by the first one.
    with session_lock(request.session) as session:
        order = order_service.place_order(
            Cart(session),
            request.user,
            request.POST.get('order_notes', ''),
        )
    return json_success({
        'order_id': order.pk,
        'redirect': f"{reverse('my_orders')}?placed={order.pk}",
    })


@ajax_endpoint('dealer_get_orders')
def ajax_get_orders(request):
    orders = order_service.orders_for_user(request.user)
    return json_success({
        'orders': [order_service.serialize_order(o) for o in orders],
    })


@ajax_endpoint('dealer_cancel_order', allowed=can_shop)
def ajax_cancel_order(request):
    order = order_service.get_order(request.POST.get('order_id'))
    order = order_service.cancel_by_dealer(order, request.user)
    return json_success({
        'order_id': order.pk,
        'new_status': order.status,
        'new_status_name': order.get_status_display(),
    })


# -------------------------------
# Dealer account
# -------------------------------
@ajax_endpoint('dealer_get_account', allowed=is_dealer)
def ajax_get_account(request):
    profile, _ = DealerProfile.objects.get_or_create(user=request.user)
    return json_success({'email': request.user.email, **profile.as_dict()})


@ajax_endpoint('dealer_update_account', allowed=is_dealer)
def ajax_update_account(request):
    email = request.POST.get('email', request.user.email).strip()
    try:
        validate_email(email)
    except DjangoValidationError:
        raise ValidationError("Please enter a valid email address.")

    with transaction.atomic():
        profile, _ = DealerProfile.objects.get_or_create(user=request.user)
        for field in DealerProfile.FIELDS:
            if field in request.POST:
                setattr(profile, field, request.POST[field].strip())
        profile.save()

        if email != request.user.email:
            request.user.email = email
            request.user.save(update_fields=['email'])

    logger.info("Dealer %s updated account details", request.user)
    return json_success({'message': "Account updated successfully."})


# -------------------------------
# Warehouse endpoints
# -------------------------------
@ajax_endpoint('warehouse_get_orders', allowed=can_manage_orders)
def ajax_warehouse_orders(request):
    orders = order_service.search_orders(
        request.POST.get('search', ''),
        request.POST.get('status', 'all'),
    )
    return json_success({
        'orders': [order_service.serialize_order(o) for o in orders],
        'statuses': order_service.status_choices(),
    })


@ajax_endpoint('warehouse_get_order_detail', allowed=can_manage_orders)
def ajax_warehouse_order_detail(request):
    order = order_service.get_order(request.POST.get('order_id'))
    return json_success({
        'order': order_service.serialize_order(order, with_items=True),
        'statuses': order_service.status_choices(),
    })


@ajax_endpoint('warehouse_update_order_status', allowed=can_manage_orders)
def ajax_warehouse_update_status(request):
    order = order_service.get_order(request.POST.get('order_id'))
    order = order_service.update_status(order, request.POST.get('status', ''))
    return json_success({
        'new_status': order.status,
        'new_status_name': order.get_status_display(),
    })
