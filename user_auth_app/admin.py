from django.contrib import admin
from django.contrib.auth import get_user_model

User = get_user_model()


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """
    User list with id, email, name, role and activity flags.
    Passwords are never editable here; use the API or `changepassword`.
    """
    list_display = (
        "id",
        "email",
        "name",
        "role",
        "store_count",
        "is_active",
        "created_at",
        "last_login",
    )
    ordering = ("-created_at", "-id")
    search_fields = ("email", "name", "address")
    list_filter = ("role", "is_active")
    readonly_fields = ("password", "last_login", "created_at")
    fields = ("email", "name", "address", "role", "is_active", "password", "last_login", "created_at")

    def store_count(self, obj):
        return obj.stores.count() if obj.role == User.Role.STORE_OWNER else ""
    store_count.short_description = "stores"
