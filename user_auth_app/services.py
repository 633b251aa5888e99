"""Account operations shared by the auth, self-service and admin endpoints."""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from common.exceptions import Conflict

logger = logging.getLogger(__name__)

User = get_user_model()

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class IncorrectPassword(Exception):
    """The supplied current password does not match."""


def email_taken(email: str) -> bool:
    return User.objects.filter(email__iexact=email.strip()).exists()


def create_account(*, email, password, name, address="", role=User.Role.USER):
    """Create a user after checking email uniqueness; raise ``Conflict`` if taken."""
    if email_taken(email):
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                address=address,
                role=role,
            )
    except IntegrityError:
        # Lost a race against a concurrent signup with the same email.
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)
    logger.info("Created %s account %s", role, user.id)
    return user


def change_password(user, current_password: str, new_password: str) -> None:
    """Replace the password after verifying the current one."""
    if not user.check_password(current_password):
        raise IncorrectPassword()
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password changed for user %s", user.id)
