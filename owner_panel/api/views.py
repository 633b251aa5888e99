"""Owner panel views.

Endpoints for users with the STORE_OWNER role. Every store lookup is scoped
to the requesting owner, so a store owned by someone else is reported as
404 rather than 403 and its existence is not revealed.
"""

from collections import defaultdict

from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.listing import paginate
from common.exceptions import error_response
from ratings.models import Rating
from ratings.services import rating_statistics
from stores.models import Store
from stores.queries import annotate_rating_stats
from user_auth_app.api.permissions import HasRouteRole
from .serializers import (
    OwnedStoreSerializer,
    OwnerRatingsQuerySerializer,
    StoreOutputSerializer,
    StoreRatingSerializer,
    StoreUpdateSerializer,
)

RECENT_RATINGS_PER_STORE = 5


# ----------------------------- helpers (module-level) -----------------------------

def _owned_store_or_404(owner, pk: int, action: str) -> Store:
    store = Store.objects.filter(pk=pk, owner=owner).first()
    if store is None:
        raise NotFound(f"Store not found or you do not have permission to {action}")
    return store


def _recent_ratings_by_store(store_ids):
    """Group the latest ratings per store, capped at RECENT_RATINGS_PER_STORE."""
    grouped = defaultdict(list)
    if not store_ids:
        return grouped
    rows = (
        Rating.objects.filter(store_id__in=store_ids)
        .select_related("user")
        .order_by("-created_at", "-id")
    )
    for rating in rows:
        bucket = grouped[rating.store_id]
        if len(bucket) < RECENT_RATINGS_PER_STORE:
            bucket.append(
                {"score": rating.score, "user_name": rating.user.name, "created_at": rating.created_at}
            )
    return grouped


# --------------------------------------- views ---------------------------------------

class OwnerBaseView(APIView):
    permission_classes = [HasRouteRole]
    role_scope = "owner"


class OwnerStoreListView(OwnerBaseView):
    """GET /api/owner/stores -> owned stores with rating breakdowns."""

    def get(self, request, *args, **kwargs):
        stores = list(
            annotate_rating_stats(Store.objects.filter(owner=request.user), with_breakdown=True)
            .order_by("name", "id")
        )
        recent = _recent_ratings_by_store([store.id for store in stores])
        data = OwnedStoreSerializer(stores, many=True, context={"recent_ratings": recent}).data
        return Response({"success": True, "data": data, "total": len(data)})


class OwnerStoreRatingsView(OwnerBaseView):
    """GET /api/owner/stores/<pk>/ratings?page&limit -> paginated ratings + statistics."""

    def get(self, request, pk: int, *args, **kwargs):
        params = OwnerRatingsQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        page, limit = params.validated_data["page"], params.validated_data["limit"]

        store = _owned_store_or_404(request.user, pk, "view its ratings")
        qs = Rating.objects.filter(store=store).select_related("user").order_by("-created_at", "-id")
        ratings, pagination = paginate(qs, page, limit, "totalRatings")

        return Response(
            {
                "success": True,
                "data": {
                    "store": {"id": store.id, "name": store.name, "address": store.address},
                    "ratings": StoreRatingSerializer(ratings, many=True).data,
                    "statistics": rating_statistics(store.id),
                },
                "pagination": pagination,
            },
            status=status.HTTP_200_OK,
        )


class OwnerStoreUpdateView(OwnerBaseView):
    """PATCH /api/owner/stores/<pk> {name?, address?} -> updated store."""

    def patch(self, request, pk: int, *args, **kwargs):
        serializer = StoreUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data:
            return error_response(
                "At least one field (name or address) must be provided for update",
                status.HTTP_400_BAD_REQUEST,
            )

        store = _owned_store_or_404(request.user, pk, "update it")
        for field, value in serializer.validated_data.items():
            setattr(store, field, value)
        store.save(update_fields=list(serializer.validated_data.keys()))

        return Response(
            {"success": True, "message": "Store updated successfully", "data": StoreOutputSerializer(store).data}
        )
