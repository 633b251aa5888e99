"""Cookie-based session authentication for DRF views.

The session token identifies the user; the user row loaded from the database
is the authority for role and existence. A deleted user or a changed role
therefore takes effect on the very next request.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .tokens import InvalidToken, TokenExpired, verify_token

logger = logging.getLogger(__name__)

User = get_user_model()


class CookieTokenAuthentication(BaseAuthentication):
    """Authenticate from the signed session cookie.

    - no cookie: anonymous (permission classes decide between 401 and access)
    - invalid or expired token: 401
    - valid token whose user no longer exists: 401
    """

    def authenticate(self, request):
        token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE)
        if not token:
            return None

        try:
            claims = verify_token(token)
        except TokenExpired:
            logger.info("Rejected expired session token")
            raise AuthenticationFailed("Token expired.")
        except InvalidToken:
            logger.info("Rejected invalid session token")
            raise AuthenticationFailed("Invalid token.")

        user = User.objects.filter(pk=claims.user_id, is_active=True).first()
        if user is None:
            logger.info("Session token for missing user %s", claims.user_id)
            raise AuthenticationFailed("Invalid token. User not found.")
        return user, token

    def authenticate_header(self, request):
        # A non-empty value makes DRF answer 401 instead of 403.
        return 'Cookie realm="api"'


class OptionalCookieTokenAuthentication(CookieTokenAuthentication):
    """Like ``CookieTokenAuthentication`` but every failure degrades to anonymous.

    Used on public endpoints where the viewer's identity only adds optional
    data (their own rating) and must never fail the request.
    """

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed as exc:
            logger.debug("Ignoring session token on public endpoint: %s", exc.detail)
            return None
