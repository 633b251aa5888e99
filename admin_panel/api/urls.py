from django.urls import path

from .views import (
    AdminDashboardView,
    AdminStoreDeleteView,
    AdminStoreListCreateView,
    AdminUpdatePasswordView,
    AdminUserDeleteView,
    AdminUserListCreateView,
)

urlpatterns = [
    path("admin/users", AdminUserListCreateView.as_view(), name="admin-user-list"),
    path("admin/users/<int:pk>", AdminUserDeleteView.as_view(), name="admin-user-delete"),
    path("admin/stores", AdminStoreListCreateView.as_view(), name="admin-store-list"),
    path("admin/stores/<int:pk>", AdminStoreDeleteView.as_view(), name="admin-store-delete"),
    path("admin/dashboard", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("admin/update-password", AdminUpdatePasswordView.as_view(), name="admin-update-password"),
]
