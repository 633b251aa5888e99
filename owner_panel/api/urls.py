from django.urls import path

from .views import OwnerStoreListView, OwnerStoreRatingsView, OwnerStoreUpdateView

urlpatterns = [
    path("owner/stores", OwnerStoreListView.as_view(), name="owner-store-list"),
    path("owner/stores/<int:pk>", OwnerStoreUpdateView.as_view(), name="owner-store-update"),
    path("owner/stores/<int:pk>/ratings", OwnerStoreRatingsView.as_view(), name="owner-store-ratings"),
]
