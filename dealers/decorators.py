import logging
from functools import wraps

from django.shortcuts import redirect, render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .dealer_utils import home_url_for, json_error
from .exceptions import AccessDeniedError, PortalError
from .nonces import verify_nonce

logger = logging.getLogger(__name__)


def ajax_endpoint(action, allowed=None):
    """
    Wrap a JSON view: POST only, logged-in user, optional capability check
    (``allowed(user) -> bool``) and a valid ``nonce`` for ``action``.
    PortalError raised by the view becomes a failure response.

    The ``nonce`` is signed for this user and this action, so Django's
    cookie-based CSRF check is not applied on top of it.
    """
    def decorator(view):
        @csrf_exempt
        @require_POST
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return json_error("Please log in.", status=401)
            try:
                if allowed is not None and not allowed(request.user):
                    logger.warning("User %s denied %s", request.user, action)
                    raise AccessDeniedError()
                if not verify_nonce(request, action, request.POST.get('nonce')):
                    raise AccessDeniedError("Security check failed.")
                return view(request, *args, **kwargs)
            except PortalError as e:
                return json_error(e.message, status=e.status_code)
        return wrapper
    return decorator


def page_for(allowed):
    """Redirect users who lack the capability to their own landing page."""
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return redirect('login')
            if not allowed(request.user):
                target = home_url_for(request.user)
                if target == request.path:
                    return render(request, 'dealers/no_access.html', status=403)
                return redirect(target)
            return view(request, *args, **kwargs)
        return wrapper
    return decorator
