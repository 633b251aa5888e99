from django.contrib import admin
from django.urls import include, path

from common.api.views import HealthView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health", HealthView.as_view(), name="health"),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("stores.api.urls")),
    path("api/", include("owner_panel.api.urls")),
    path("api/", include("admin_panel.api.urls")),
]
