"""Auth API permissions.

Contains the role gate used by every protected endpoint, plus the explicit
allow-any alias used by signup/login.
"""

from rest_framework.permissions import AllowAny, BasePermission
from rest_framework.request import Request
from rest_framework.views import View

from user_auth_app.roles import allowed_roles


class AllowAnyAuthEntry(AllowAny):
    """Explicit alias for signup/login/logout endpoints (semantics: allow any)."""
    pass


class HasRouteRole(BasePermission):
    """Grant access when the authenticated user's role is allowed for the view's scope.

    Note:
        - Anonymous requests fail here and DRF turns that into 401, because the
          cookie authenticator supplies an authenticate header.
        - An authenticated user with the wrong role gets 403.
    """

    message = "Access denied. Insufficient permissions."

    def has_permission(self, request: Request, view: View) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        scope = getattr(view, "role_scope", "authenticated")
        return user.role in allowed_roles(scope)
