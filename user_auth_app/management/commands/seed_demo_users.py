from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from stores.models import Store

DEMO_USERS = {
    "ADMIN": {
        "email": "admin@example.com",
        "password": "Admin@1234",
        "name": "Platform Administrator Account",
        "address": "1 Admin Street",
    },
    "STORE_OWNER": {
        "email": "owner@example.com",
        "password": "Owner@1234",
        "name": "Demo Store Owner Account Name",
        "address": "2 Market Square",
    },
    "USER": {
        "email": "user@example.com",
        "password": "User@12345",
        "name": "Demo Regular User Account Name",
        "address": "3 Residential Road",
    },
}

DEMO_STORE = {"name": "Demo Corner Store", "address": "2 Market Square"}


class Command(BaseCommand):
    help = "Create or update one demo user per role plus a demo store."

    def handle(self, *args, **options):
        User = get_user_model()

        users = {}
        for role, cfg in DEMO_USERS.items():
            u, created = User.objects.get_or_create(
                email=cfg["email"],
                defaults={"name": cfg["name"], "address": cfg["address"], "role": role},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.email}'"))
            else:
                self.stdout.write(f"User '{u.email}' already exists")

            # set (or reset) password, role and admin-site rights to the documented values
            u.set_password(cfg["password"])
            u.role = role
            u.is_superuser = role == User.Role.ADMIN
            u.save(update_fields=["password", "role", "is_superuser"])
            users[role] = u
            self.stdout.write(f"  → role={role}")

        store, created = Store.objects.get_or_create(
            name=DEMO_STORE["name"],
            owner=users["STORE_OWNER"],
            defaults={"address": DEMO_STORE["address"]},
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created store '{store.name}'"))

        self.stdout.write(self.style.SUCCESS("Demo users ready."))
