"""Portal domain errors.

Raised by the cart, search and order modules. The JSON endpoints catch these
and turn them into a failure response carrying ``message``.
"""


class PortalError(Exception):
    status_code = 400
    default_message = "Something went wrong."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    default_message = "Invalid request."


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Not found."


class AccessDeniedError(PortalError):
    status_code = 403
    default_message = "Permission denied."


class EmptyCartError(PortalError):
    default_message = "Your cart is empty."
