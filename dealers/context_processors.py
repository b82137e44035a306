from .dealer_utils import get_cart_count
from .nonces import create_nonce
from .roles import can_manage_orders, can_shop, role_for


def portal(request):
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {}
    return {
        'portal_role': role_for(user),
        'can_shop': can_shop(user),
        'can_manage_orders': can_manage_orders(user),
        'cart_count': get_cart_count(request),
        'logout_nonce': create_nonce(request, 'dealer_logout'),
    }
