"""Stores app models.

Defines the Store model. A store belongs to exactly one user with the
STORE_OWNER role (checked when the store is created). Deleting the owner
deletes their stores; deleting a store deletes its ratings.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

STORE_NAME_MAX_LENGTH = 255
STORE_ADDRESS_MAX_LENGTH = 500


class Store(models.Model):
    """A rateable store, readable by anyone, editable by its owner."""

    name = models.CharField(max_length=STORE_NAME_MAX_LENGTH)
    address = models.CharField(max_length=STORE_ADDRESS_MAX_LENGTH, blank=True, default="")
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="stores",
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "stores"
        ordering = ("name", "id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Store<{self.id} {self.name}>"
