"""Ratings app models.

Defines the Rating model. A user has at most one rating per store; a new
submission overwrites the score of the existing row and refreshes
``created_at``, which therefore doubles as the last-updated timestamp.
Scores are integers between 1 and 5.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

MIN_SCORE = 1
MAX_SCORE = 5


class Rating(models.Model):
    """A user's 1-5 star rating of a store."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    store = models.ForeignKey(
        "stores.Store",
        on_delete=models.CASCADE,
        related_name="ratings",
    )
    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_SCORE), MaxValueValidator(MAX_SCORE)]
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "ratings"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "store"],
                name="unique_rating_per_user_and_store",
            ),
            models.CheckConstraint(
                condition=models.Q(score__gte=MIN_SCORE) & models.Q(score__lte=MAX_SCORE),
                name="rating_score_between_1_and_5",
            ),
        ]
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Rating<{self.id} {self.user_id}->{self.store_id} {self.score}>"
