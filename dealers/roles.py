from django.contrib.auth import get_user_model

from .models import PortalAccount, Role

SHOPPING_ROLES = frozenset({Role.DEALER, Role.ADMINISTRATOR})
ORDER_MANAGER_ROLES = frozenset({Role.WAREHOUSE_MANAGER, Role.ADMINISTRATOR})


def role_for(user):
    """Return the portal Role of ``user``, or None for anonymous/unassigned users."""
    if user is None or not user.is_authenticated:
        return None
    if user.is_superuser:
        return Role.ADMINISTRATOR
    try:
        return Role(user.portal_account.role)
    except PortalAccount.DoesNotExist:
        return None


def has_role(user, *roles):
    return role_for(user) in roles


def can_shop(user):
    return role_for(user) in SHOPPING_ROLES


def can_manage_orders(user):
    return role_for(user) in ORDER_MANAGER_ROLES


def can_use_admin(user):
    return role_for(user) == Role.ADMINISTRATOR and user.is_staff


def warehouse_managers():
    User = get_user_model()
    return User.objects.filter(
        is_active=True,
        portal_account__role=Role.WAREHOUSE_MANAGER,
    )


def is_dealer(user):
    return role_for(user) == Role.DEALER
