# dealers/middleware.py
from django.conf import settings
from django.shortcuts import redirect, resolve_url
from django.utils.deprecation import MiddlewareMixin

from .models import Role
from .roles import role_for


class ForceLoginMiddleware(MiddlewareMixin):
    """
    Every portal page requires a logged-in user.
    The login page, admin, static files and the JSON endpoints (which answer
    with their own 401) are left alone. Dealers never get into the admin.
    """
    OPEN_PREFIXES = ('/ajax/', '/__reload__/')

    def process_request(self, request):
        path = request.path
        login_path = resolve_url(settings.LOGIN_URL)

        if path.startswith('/admin/'):
            if role_for(request.user) == Role.DEALER:
                return redirect('inventory')
            return None

        if path == login_path or path.startswith(self.OPEN_PREFIXES):
            return None
        if path.startswith('/' + settings.STATIC_URL.lstrip('/')):
            return None

        if not request.user.is_authenticated:
            return redirect(login_path)
        return None
