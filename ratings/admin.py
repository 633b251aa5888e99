from django.contrib import admin

from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    """
    Read-only rating list; scores are changed through the API.
    """
    list_display = ("id", "store", "user", "score", "created_at")
    list_select_related = ("store", "user")
    list_filter = ("score", "created_at")
    search_fields = ("store__name", "user__email", "user__name")
    ordering = ("-created_at", "-id")
    readonly_fields = ("store", "user", "score", "created_at")

    def has_add_permission(self, request):
        return False
