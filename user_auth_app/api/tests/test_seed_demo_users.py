from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from stores.models import Store
from user_auth_app.management.commands.seed_demo_users import DEMO_USERS

User = get_user_model()


class SeedDemoUsersTests(TestCase):
    def test_creates_one_user_per_role_and_a_store(self):
        call_command("seed_demo_users", stdout=StringIO())

        for role, cfg in DEMO_USERS.items():
            user = User.objects.get(email=cfg["email"])
            self.assertEqual(user.role, role)
            self.assertTrue(user.check_password(cfg["password"]))
        self.assertEqual(Store.objects.filter(owner__email=DEMO_USERS["STORE_OWNER"]["email"]).count(), 1)

    def test_only_admin_gets_admin_site_permissions(self):
        call_command("seed_demo_users", stdout=StringIO())

        admin = User.objects.get(email=DEMO_USERS["ADMIN"]["email"])
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertTrue(admin.has_perm("stores.view_store"))

        for role in ("STORE_OWNER", "USER"):
            user = User.objects.get(email=DEMO_USERS[role]["email"])
            self.assertFalse(user.is_superuser)
            self.assertFalse(user.has_perm("stores.view_store"))

    def test_is_idempotent_and_resets_passwords(self):
        call_command("seed_demo_users", stdout=StringIO())
        admin = User.objects.get(email=DEMO_USERS["ADMIN"]["email"])
        admin.set_password("Changed#Pass1")
        admin.save()

        call_command("seed_demo_users", stdout=StringIO())
        self.assertEqual(User.objects.count(), 3)
        self.assertEqual(Store.objects.count(), 1)
        admin.refresh_from_db()
        self.assertTrue(admin.check_password(DEMO_USERS["ADMIN"]["password"]))
