"""Store directory queries.

Builds the filtered, rating-annotated store queryset used by the public and
admin listings. Text filters become WHERE clauses; the minimum-rating filter
runs on the computed average and so becomes a HAVING clause. Callers count
and slice the same queryset, which keeps totals and pages consistent.
"""

from django.db.models import Avg, Count, FloatField, Q, Value
from django.db.models.functions import Coalesce

from ratings.models import Rating
from ratings.services import breakdown_aggregates
from .models import Store

PUBLIC_SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "address": "address",
    "average_rating": "average_rating",
    "total_ratings": "total_ratings",
}

ADMIN_SORT_FIELDS = {
    **PUBLIC_SORT_FIELDS,
    "owner_name": "owner__name",
}


def annotate_rating_stats(qs, with_breakdown=False):
    """Add ``average_rating`` (0 when unrated) and ``total_ratings``."""
    qs = qs.annotate(
        average_rating=Coalesce(Avg("ratings__score"), Value(0.0), output_field=FloatField()),
        total_ratings=Count("ratings"),
    )
    if with_breakdown:
        qs = qs.annotate(**breakdown_aggregates("ratings__"))
    return qs


def store_directory(*, name="", address="", search="", owner="", min_rating=None):
    """Stores matching the given filters, annotated with rating statistics."""
    qs = Store.objects.select_related("owner")
    if name:
        qs = qs.filter(name__icontains=name)
    if address:
        qs = qs.filter(address__icontains=address)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(address__icontains=search))
    if owner:
        qs = qs.filter(owner__name__icontains=owner)

    qs = annotate_rating_stats(qs)
    if min_rating is not None:
        qs = qs.filter(average_rating__gte=min_rating)
    return qs


def viewer_scores(user, store_ids) -> dict:
    """Map store id -> score for the stores ``user`` has rated among ``store_ids``."""
    if user is None or not user.is_authenticated or not store_ids:
        return {}
    return dict(
        Rating.objects.filter(user=user, store_id__in=store_ids).values_list("store_id", "score")
    )


def recent_ratings(store_id, limit=10):
    return (
        Rating.objects.filter(store_id=store_id)
        .select_related("user")
        .order_by("-created_at", "-id")[:limit]
    )
