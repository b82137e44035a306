"""
Action-scoped request tokens.

Each JSON endpoint is protected by a token signed for one action and one
user. A token issued for ``dealer_add_to_cart`` is useless for
``dealer_place_order`` and for any other account.
"""
import logging

from django.conf import settings
from django.core import signing

logger = logging.getLogger(__name__)

SALT_PREFIX = "dealers.nonce."


def _user_id(request):
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return 0
    return user.pk


def create_nonce(request, action):
    return signing.dumps({'u': _user_id(request)}, salt=SALT_PREFIX + action, compress=True)


def verify_nonce(request, action, token):
    if not token:
        return False
    try:
        payload = signing.loads(
            token,
            salt=SALT_PREFIX + action,
            max_age=settings.DEALER_NONCE_MAX_AGE,
        )
    except signing.BadSignature:
        logger.warning("Rejected %s token for user %s", action, _user_id(request))
        return False
    return payload.get('u') == _user_id(request)


def nonces_for(request, *actions):
    return {action: create_nonce(request, action) for action in actions}
