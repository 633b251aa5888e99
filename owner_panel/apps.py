from django.apps import AppConfig


class OwnerPanelConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "owner_panel"
    verbose_name = "Store owner panel"
