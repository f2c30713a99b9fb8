from functools import wraps
from flask import g, request
from metrifi.application.auth.authorize import Denied, authorize
from metrifi.errors import Forbidden, Unauthenticated
from metrifi.services.identity import IdentityProvider


def basic_auth_required(fn):
    """
    Guard a view with the Basic credential gate.

    The resolved principal is stored on ``g.current_principal``.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        result = authorize(
            request.headers.get("Authorization"),
            identity_provider=IdentityProvider(),
        )

        if isinstance(result, Denied):
            error_cls = Unauthenticated if result.status == 401 else Forbidden
            raise error_cls(result.message)

        g.current_principal = result.principal
        return fn(*args, **kwargs)
    return wrapper
