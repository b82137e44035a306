# dealers/dealer_utils.py
from django.http import JsonResponse
from django.urls import reverse

from .cart import Cart
from .models import Role
from .roles import can_use_admin, role_for


def get_cart_count(request):
    """
    Returns the total unit count in the session cart.
    """
    return Cart(request.session).count()


def json_success(data=None, status=200):
    return JsonResponse({'success': True, 'data': data or {}}, status=status)


def json_error(message, status=400):
    return JsonResponse({'success': False, 'data': {'message': message}}, status=status)


def home_url_for(user):
    """Landing page after login, by role."""
    if can_use_admin(user):
        return reverse('admin:index')
    if role_for(user) == Role.WAREHOUSE_MANAGER:
        return reverse('warehouse_orders')
    return reverse('inventory')
