"""Allowed roles per route scope.

Views declare a ``role_scope``; ``HasRouteRole`` resolves it here. This is the
single place that says which roles may reach which group of endpoints.
"""

from .models import User

Role = User.Role

ROUTE_ROLES = {
    "authenticated": frozenset({Role.USER, Role.STORE_OWNER, Role.ADMIN}),
    "rate": frozenset({Role.USER, Role.STORE_OWNER, Role.ADMIN}),
    "owner": frozenset({Role.STORE_OWNER}),
    "admin": frozenset({Role.ADMIN}),
}


def allowed_roles(scope: str) -> frozenset:
    """Return the roles allowed for ``scope``; unknown scopes allow nobody."""
    return ROUTE_ROLES.get(scope, frozenset())
