from django.urls import path

from .views import RateStoreView, StoreDetailView, StoreListView

urlpatterns = [
    path("stores", StoreListView.as_view(), name="store-list"),
    path("stores/<int:pk>", StoreDetailView.as_view(), name="store-detail"),
    path("stores/<int:pk>/rate", RateStoreView.as_view(), name="store-rate"),
]
