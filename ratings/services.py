"""Rating engine.

Two operations live here:

``submit_rating``
    Rate or re-rate a store. Runs in a single transaction: the store row is
    locked, the (user, store) rating is read, then either inserted or
    overwritten in place. A user therefore never has more than one rating for
    a store; concurrent submissions by the same user for the same store
    serialize on the store lock, and the unique constraint on
    ``(user, store)`` catches anything that slips past it (the losing insert
    is turned into an update of the winning row).

``rating_statistics``
    Average, count and per-score histogram for one store, computed with a
    single aggregate query over committed rows. Nothing is cached or
    maintained incrementally, so the numbers always match the table.
"""

import logging
from dataclasses import dataclass

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg, Count, Q
from django.utils import timezone
from rest_framework.exceptions import NotFound

from common.exceptions import TransientFailure
from stores.models import Store
from .models import MAX_SCORE, MIN_SCORE, Rating

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"

# Response keys for the per-score histogram, highest score first.
BREAKDOWN_KEYS = {
    5: "five_star",
    4: "four_star",
    3: "three_star",
    2: "two_star",
    1: "one_star",
}


@dataclass(frozen=True)
class RatingOutcome:
    kind: str
    rating: Rating
    stats: dict

    @property
    def is_update(self) -> bool:
        return self.kind == UPDATED


def format_average(value) -> str:
    """Render an average with two decimals; no ratings renders as "0.00"."""
    return f"{float(value or 0):.2f}"


def breakdown_aggregates(prefix: str = "") -> dict:
    """Count expressions per score, usable in ``aggregate()`` or ``annotate()``.

    ``prefix`` is the lookup path to the rating relation, e.g. ``"ratings__"``
    when annotating stores.
    """
    return {
        key: Count(f"{prefix}id", filter=Q(**{f"{prefix}score": score}))
        for score, key in BREAKDOWN_KEYS.items()
    }


def build_statistics(average, total, counts) -> dict:
    """Assemble the statistics payload from raw aggregate values."""
    return {
        "average": format_average(average),
        "total": total or 0,
        "breakdown": {key: counts.get(key) or 0 for key in BREAKDOWN_KEYS.values()},
    }


def rating_statistics(store_id: int) -> dict:
    """Average, total and per-score counts for ``store_id``."""
    row = Rating.objects.filter(store_id=store_id).aggregate(
        average=Avg("score"),
        total=Count("id"),
        **breakdown_aggregates(),
    )
    return build_statistics(row["average"], row["total"], row)


def _overwrite(rating: Rating, score: int, now) -> Rating:
    rating.score = score
    rating.created_at = now
    rating.save(update_fields=["score", "created_at"])
    return rating


def submit_rating(user, store_id: int, score: int) -> RatingOutcome:
    """Insert or overwrite ``user``'s rating of ``store_id`` and return fresh statistics.

    Raises:
        NotFound: the store does not exist; nothing is written.
        TransientFailure: the transaction could not commit; nothing is written.
    """
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(f"score must be between {MIN_SCORE} and {MAX_SCORE}")

    try:
        with transaction.atomic():
            store = Store.objects.select_for_update().filter(pk=store_id).first()
            if store is None:
                raise NotFound("Store not found")

            now = timezone.now()
            rating = Rating.objects.select_for_update().filter(user=user, store=store).first()
            if rating is not None:
                kind = UPDATED
                _overwrite(rating, score, now)
            else:
                try:
                    with transaction.atomic():
                        rating = Rating.objects.create(user=user, store=store, score=score, created_at=now)
                    kind = CREATED
                except IntegrityError:
                    # A concurrent request inserted first; update its row instead.
                    rating = Rating.objects.select_for_update().get(user=user, store=store)
                    kind = UPDATED
                    _overwrite(rating, score, now)

            stats = rating_statistics(store.id)
    except DatabaseError as exc:
        logger.error("Rating transaction for store %s failed: %s", store_id, exc)
        raise TransientFailure() from exc

    logger.info("Rating %s: user=%s store=%s score=%s", kind, user.id, store_id, score)
    return RatingOutcome(kind=kind, rating=rating, stats=stats)
