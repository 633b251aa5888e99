from django.contrib import admin
from django.db.models import Avg, Count

from ratings.services import format_average
from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """
    Store list:
    - columns: id, name, owner, average rating, rating count, created
    - search: name, address, owner name/email
    """
    list_display = ("id", "name", "owner_name", "average_display", "rating_count", "created_at")
    list_select_related = ("owner",)
    search_fields = ("name", "address", "owner__name", "owner__email")
    ordering = ("name", "id")
    date_hierarchy = "created_at"
    raw_id_fields = ("owner",)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _average=Avg("ratings__score"),
            _count=Count("ratings"),
        )

    def owner_name(self, obj):
        return obj.owner.name if obj.owner_id else ""
    owner_name.short_description = "owner"
    owner_name.admin_order_field = "owner__name"

    def average_display(self, obj):
        return format_average(obj._average)
    average_display.short_description = "average"
    average_display.admin_order_field = "_average"

    def rating_count(self, obj):
        return obj._count
    rating_count.short_description = "ratings"
    rating_count.admin_order_field = "_count"
