"""Session token issue/verify.

Tokens are stateless: a timestamped, salted signature over the claims
``{userId, email, role}``. Validity depends only on the signature and the
token age, so there is no server-side session table. The user row is
re-read on every authenticated request (see ``authentication.py``).
"""

from dataclasses import dataclass

from django.conf import settings
from django.core import signing


class InvalidToken(Exception):
    """Signature mismatch or malformed payload."""


class TokenExpired(InvalidToken):
    """Signature is valid but the token is older than its lifetime."""


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    email: str
    role: str


def issue_token(user_id: int, email: str, role: str) -> str:
    """Return a signed token carrying the given claims."""
    payload = {"userId": user_id, "email": email, "role": role}
    return signing.dumps(payload, salt=settings.SESSION_TOKEN_SALT, compress=True)


def verify_token(token: str) -> SessionClaims:
    """Decode ``token`` or raise ``InvalidToken`` / ``TokenExpired``."""
    try:
        payload = signing.loads(
            token,
            salt=settings.SESSION_TOKEN_SALT,
            max_age=settings.SESSION_TOKEN_MAX_AGE,
        )
    except signing.SignatureExpired as exc:
        raise TokenExpired("Token expired.") from exc
    except signing.BadSignature as exc:
        raise InvalidToken("Invalid token.") from exc

    try:
        return SessionClaims(
            user_id=int(payload["userId"]),
            email=str(payload["email"]),
            role=str(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidToken("Invalid token.") from exc


def issue_token_for(user) -> str:
    return issue_token(user.id, user.email, user.role)


def set_session_cookie(response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_TOKEN_COOKIE,
        token,
        max_age=settings.SESSION_TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.SESSION_TOKEN_SECURE,
        samesite="Strict",
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(settings.SESSION_TOKEN_COOKIE, samesite="Strict")
