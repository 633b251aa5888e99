"""User auth app models.

Defines the custom User model. Users log in with their email address and
carry exactly one role (USER, STORE_OWNER or ADMIN). Emails are normalized to
lower case before they are stored so uniqueness is case-insensitive.
"""

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Manager creating users keyed by email."""

    use_in_migrations = True

    def normalize_email(self, email):
        return (email or "").strip().lower()

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address.")
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.USER)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields["role"] = User.Role.ADMIN
        extra_fields["is_superuser"] = True
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """A platform account: end user, store owner or administrator."""

    class Role(models.TextChoices):
        USER = "USER", "User"
        STORE_OWNER = "STORE_OWNER", "Store owner"
        ADMIN = "ADMIN", "Admin"

    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=60)
    address = models.CharField(max_length=400, blank=True, default="")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        db_table = "users"
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"User<{self.id} {self.email} {self.role}>"

    @property
    def is_staff(self) -> bool:
        # Grants access to the Django admin site.
        return self.role == self.Role.ADMIN

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def is_store_owner(self) -> bool:
        return self.role == self.Role.STORE_OWNER
