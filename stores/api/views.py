"""Stores API views.

Public store directory (search, sort, paginate), public store details, and
the authenticated rate-a-store endpoint. The public endpoints read the
session cookie leniently: an invalid or expired token only hides the viewer's
own rating and never fails the request.
"""

from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.listing import order_queryset, paginate, resolve_sorting
from ratings.models import Rating
from ratings.services import submit_rating
from stores.queries import (
    PUBLIC_SORT_FIELDS,
    annotate_rating_stats,
    recent_ratings,
    store_directory,
    viewer_scores,
)
from stores.models import Store
from user_auth_app.api.permissions import HasRouteRole
from user_auth_app.authentication import OptionalCookieTokenAuthentication
from .serializers import (
    RateStoreSerializer,
    StoreDetailSerializer,
    StoreListQuerySerializer,
    StoreSummarySerializer,
)


def _viewer(request):
    user = request.user
    return user if user and user.is_authenticated else None


class StoreListView(APIView):
    """GET /api/stores -> paginated store summaries with the viewer's own rating."""

    authentication_classes = [OptionalCookieTokenAuthentication]
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        params = StoreListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        q = params.validated_data

        sort_by, sort_order = resolve_sorting(q.get("sortBy"), q.get("sortOrder"), PUBLIC_SORT_FIELDS)
        qs = store_directory(
            name=q.get("name", ""),
            address=q.get("address", ""),
            min_rating=q.get("minRating"),
        )
        qs = order_queryset(qs, sort_by, sort_order, PUBLIC_SORT_FIELDS)
        stores, pagination = paginate(qs, q["page"], q["limit"], "totalStores")

        scores = viewer_scores(_viewer(request), [store.id for store in stores])
        data = StoreSummarySerializer(stores, many=True, context={"viewer_scores": scores}).data
        return Response(
            {
                "success": True,
                "data": data,
                "pagination": pagination,
                "filters": {
                    "name": q.get("name") or None,
                    "address": q.get("address") or None,
                    "minRating": q.get("minRating"),
                },
                "sorting": {"sortBy": sort_by, "sortOrder": sort_order},
            },
            status=status.HTTP_200_OK,
        )


class StoreDetailView(APIView):
    """GET /api/stores/<pk> -> store, rating summary, viewer rating, 10 recent ratings."""

    authentication_classes = [OptionalCookieTokenAuthentication]
    permission_classes = [AllowAny]

    def get(self, request, pk: int, *args, **kwargs):
        store = annotate_rating_stats(Store.objects.select_related("owner")).filter(pk=pk).first()
        if store is None:
            raise NotFound("Store not found")

        viewer = _viewer(request)
        viewer_rating = Rating.objects.filter(user=viewer, store=store).first() if viewer else None
        context = {
            "viewer_rating": viewer_rating,
            "recent_ratings": recent_ratings(store.id),
        }
        return Response({"success": True, "data": StoreDetailSerializer(store, context=context).data})


class RateStoreView(APIView):
    """POST /api/stores/<pk>/rate {score} -> 201 when created, 200 when updated."""

    permission_classes = [HasRouteRole]
    role_scope = "rate"

    def post(self, request, pk: int, *args, **kwargs):
        serializer = RateStoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        score = serializer.validated_data["score"]

        outcome = submit_rating(request.user, pk, score)
        return Response(
            {
                "success": True,
                "message": "Rating updated successfully" if outcome.is_update else "Rating added successfully",
                "data": {
                    "storeId": pk,
                    "userId": request.user.id,
                    "score": score,
                    "isUpdate": outcome.is_update,
                    "result": outcome.kind,
                    "ratingStats": outcome.stats,
                },
            },
            status=status.HTTP_200_OK if outcome.is_update else status.HTTP_201_CREATED,
        )
