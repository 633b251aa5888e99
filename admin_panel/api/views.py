"""Admin panel views.

User and store management for the ADMIN role: filtered/sorted/paginated
lists, creation, deletion (cascading), the dashboard, and the admin's own
password update.
"""

import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Avg, Count, FloatField, Q, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from common.api.listing import order_queryset, paginate, resolve_sorting
from common.exceptions import error_response
from ratings.models import Rating
from ratings.services import format_average
from stores.models import Store
from stores.queries import ADMIN_SORT_FIELDS, store_directory
from user_auth_app.api.permissions import HasRouteRole
from user_auth_app.api.serializers import PasswordUpdateSerializer, UserSerializer
from user_auth_app.api.views import password_change_error
from user_auth_app.services import create_account
from .serializers import (
    AdminStoreCreatedSerializer,
    AdminStoreCreateSerializer,
    AdminStoreListQuerySerializer,
    AdminStoreRowSerializer,
    AdminUserCreateSerializer,
    AdminUserListQuerySerializer,
    AdminUserRowSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()

USER_SORT_FIELDS = {
    "id": "id",
    "name": "name",
    "email": "email",
    "address": "address",
    "role": "role",
    "average_rating": "average_rating",
}

RECENT_ACTIVITY_DAYS = 7


# ----------------------------- helpers (module-level) -----------------------------

def _user_directory(*, name="", email="", address="", role=""):
    """Users matching the filters, annotated with the average rating of the stores they own."""
    qs = User.objects.all()
    if name:
        qs = qs.filter(name__icontains=name)
    if email:
        qs = qs.filter(email__icontains=email)
    if address:
        qs = qs.filter(address__icontains=address)
    if role:
        qs = qs.filter(role=role)
    return qs.annotate(
        average_rating=Coalesce(Avg("stores__ratings__score"), Value(0.0), output_field=FloatField())
    )


def _list_response(rows, pagination, filters, sort_by, sort_order):
    return Response(
        {
            "success": True,
            "data": rows,
            "pagination": pagination,
            "filters": filters,
            "sorting": {"sortBy": sort_by, "sortOrder": sort_order},
        },
        status=status.HTTP_200_OK,
    )


# --------------------------------------- views ---------------------------------------

class AdminBaseView(APIView):
    permission_classes = [HasRouteRole]
    role_scope = "admin"


class AdminUserListCreateView(AdminBaseView):
    """GET: filtered/sorted/paginated users. POST: create a USER or STORE_OWNER."""

    def get(self, request, *args, **kwargs):
        params = AdminUserListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        q = params.validated_data

        sort_by, sort_order = resolve_sorting(q.get("sortBy"), q.get("sortOrder"), USER_SORT_FIELDS)
        qs = _user_directory(
            name=q.get("name", ""),
            email=q.get("email", ""),
            address=q.get("address", ""),
            role=q.get("role", ""),
        )
        qs = order_queryset(qs, sort_by, sort_order, USER_SORT_FIELDS)
        users, pagination = paginate(qs, q["page"], q["limit"], "totalUsers")

        filters = {key: q.get(key) or None for key in ("name", "email", "address", "role")}
        return _list_response(
            AdminUserRowSerializer(users, many=True).data, pagination, filters, sort_by, sort_order
        )

    def post(self, request, *args, **kwargs):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = create_account(**serializer.validated_data)
        logger.info("Admin %s created user %s", request.user.id, user.id)
        return Response(
            {"success": True, "message": "User created successfully", "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class AdminUserDeleteView(AdminBaseView):
    """DELETE /api/admin/users/<pk> -> remove a user and everything they own."""

    def delete(self, request, pk: int, *args, **kwargs):
        user = User.objects.filter(pk=pk).first()
        if user is None:
            raise NotFound("User not found")
        if user.pk == request.user.pk:
            return error_response("Cannot delete your own account", status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            user.delete()
        logger.info("Admin %s deleted user %s", request.user.id, pk)
        return Response({"success": True, "message": "User deleted successfully"})


class AdminStoreListCreateView(AdminBaseView):
    """GET: filtered/sorted/paginated stores. POST: create a store for a STORE_OWNER."""

    def get(self, request, *args, **kwargs):
        params = AdminStoreListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        q = params.validated_data

        sort_by, sort_order = resolve_sorting(q.get("sortBy"), q.get("sortOrder"), ADMIN_SORT_FIELDS)
        qs = store_directory(
            search=q.get("search", ""),
            name=q.get("name", ""),
            address=q.get("address", ""),
            owner=q.get("owner", ""),
            min_rating=q.get("minRating"),
        )
        qs = order_queryset(qs, sort_by, sort_order, ADMIN_SORT_FIELDS)
        stores, pagination = paginate(qs, q["page"], q["limit"], "totalStores")

        filters = {key: q.get(key) or None for key in ("search", "name", "address", "owner")}
        filters["minRating"] = q.get("minRating")
        return _list_response(
            AdminStoreRowSerializer(stores, many=True).data, pagination, filters, sort_by, sort_order
        )

    def post(self, request, *args, **kwargs):
        serializer = AdminStoreCreateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        store = serializer.save()
        logger.info("Admin %s created store %s", request.user.id, store.id)
        return Response(
            {"success": True, "message": "Store created successfully", "data": AdminStoreCreatedSerializer(store).data},
            status=status.HTTP_201_CREATED,
        )


class AdminStoreDeleteView(AdminBaseView):
    """DELETE /api/admin/stores/<pk> -> remove a store and its ratings."""

    def delete(self, request, pk: int, *args, **kwargs):
        store = Store.objects.filter(pk=pk).first()
        if store is None:
            raise NotFound("Store not found")

        with transaction.atomic():
            Rating.objects.filter(store=store).delete()
            store.delete()
        logger.info("Admin %s deleted store %s", request.user.id, pk)
        return Response({"success": True, "message": "Store deleted successfully"})


class AdminDashboardView(AdminBaseView):
    """
    GET /api/admin/dashboard

    Returns platform-wide aggregates:
    - totals of users, stores and ratings
    - average score across all ratings ("0.00" when there are none)
    - users per role
    - users, stores and ratings created in the last 7 days
    """

    def get(self, request, *args, **kwargs):
        since = timezone.now() - timedelta(days=RECENT_ACTIVITY_DAYS)

        by_role = {
            row["role"]: row["count"]
            for row in User.objects.order_by().values("role").annotate(count=Count("id"))
        }
        ratings = Rating.objects.aggregate(
            total=Count("id"),
            average=Avg("score"),
            recent=Count("id", filter=Q(created_at__gte=since)),
        )

        data = {
            "totals": {
                "totalUsers": User.objects.count(),
                "totalStores": Store.objects.count(),
                "totalRatings": ratings["total"],
            },
            "averages": {"averageRating": format_average(ratings["average"])},
            "userStats": {"byRole": by_role},
            "recentActivity": {
                "last7Days": {
                    "newUsers": User.objects.filter(created_at__gte=since).count(),
                    "newStores": Store.objects.filter(created_at__gte=since).count(),
                    "newRatings": ratings["recent"],
                }
            },
        }
        return Response({"success": True, "data": data}, status=status.HTTP_200_OK)


class AdminUpdatePasswordView(AdminBaseView):
    """PUT /api/admin/update-password {currentPassword, newPassword, confirmPassword}."""

    def put(self, request, *args, **kwargs):
        serializer = PasswordUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        failed = password_change_error(request.user, serializer)
        if failed is not None:
            return failed
        return Response({"success": True, "message": "Password updated successfully"})
