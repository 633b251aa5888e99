"""Field rules shared by every endpoint that accepts user data."""

import re

from rest_framework import serializers

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16
NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
USER_ADDRESS_MAX_LENGTH = 400

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"
_UPPERCASE_RE = re.compile(r"[A-Z]")
_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


def validate_password_strength(value: str) -> str:
    """8-16 characters, at least one uppercase letter and one special character."""
    errors = []
    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        errors.append("Password must be between 8 and 16 characters")
    if not _UPPERCASE_RE.search(value) or not _SPECIAL_RE.search(value):
        errors.append("Password must contain at least one uppercase letter and one special character")
    if errors:
        raise serializers.ValidationError(errors)
    return value


def password_field():
    return serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        validators=[validate_password_strength],
    )


def name_field(required=True):
    return serializers.CharField(
        required=required,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        error_messages={
            "min_length": "Name must be between 20 and 60 characters",
            "max_length": "Name must be between 20 and 60 characters",
        },
    )


def address_field(max_length=USER_ADDRESS_MAX_LENGTH, required=False):
    return serializers.CharField(
        required=required,
        allow_blank=not required,
        max_length=max_length,
        default="" if not required else serializers.empty,
        error_messages={"max_length": f"Address must not exceed {max_length} characters"},
    )
