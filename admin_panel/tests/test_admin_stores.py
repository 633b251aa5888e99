from django.conf import settings
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from ratings.models import Rating
from stores.models import Store
from user_auth_app.tokens import issue_token_for

User = get_user_model()


def make_user(email, name="Admin Store Test Person", role=None):
    return User.objects.create_user(
        email=email,
        password="Secret#Pass1",
        name=name,
        role=role or User.Role.USER,
    )


class AdminStoresBase(APITestCase):
    def setUp(self):
        self.admin = make_user("admin@example.com", role=User.Role.ADMIN)
        self.owner = make_user("owner@example.com", name="Anna Shopkeeper Example", role=User.Role.STORE_OWNER)
        self.other_owner = make_user("other@example.com", name="Bernd Merchant Example", role=User.Role.STORE_OWNER)
        self.user = make_user("user@example.com")
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = issue_token_for(self.admin)


class AdminStoreListTests(AdminStoresBase):
    def setUp(self):
        super().setUp()
        self.url = reverse("admin-store-list")
        self.bakery = Store.objects.create(name="Bakery Central", address="Bread Lane 1", owner=self.owner)
        self.books = Store.objects.create(name="Book Nook", address="Central Ave 2", owner=self.other_owner)
        self.cafe = Store.objects.create(name="Cafe Corner", address="Coffee Rd 3", owner=self.owner)
        Rating.objects.create(user=self.user, store=self.bakery, score=5)
        Rating.objects.create(user=self.admin, store=self.books, score=2)

    def test_list_rows(self):
        res = self.client.get(self.url, {"sortOrder": "ASC"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["pagination"]["totalStores"], 3)
        first = res.data["data"][0]
        self.assertEqual(first["name"], "Bakery Central")
        self.assertEqual(first["email"], "owner@example.com")
        self.assertEqual(first["owner"], "Anna Shopkeeper Example")
        self.assertEqual(first["average_rating"], "5.00")
        self.assertEqual(first["total_ratings"], 1)

    def test_search_matches_name_or_address(self):
        res = self.client.get(self.url, {"search": "central", "sortOrder": "ASC"})
        names = [row["name"] for row in res.data["data"]]
        self.assertEqual(names, ["Bakery Central", "Book Nook"])
        self.assertEqual(res.data["filters"]["search"], "central")

    def test_filter_by_owner_name(self):
        res = self.client.get(self.url, {"owner": "merchant"})
        self.assertEqual([row["name"] for row in res.data["data"]], ["Book Nook"])

    def test_min_rating(self):
        res = self.client.get(self.url, {"minRating": 3})
        self.assertEqual([row["name"] for row in res.data["data"]], ["Bakery Central"])
        self.assertEqual(res.data["pagination"]["totalStores"], 1)

    def test_sort_by_owner_name(self):
        res = self.client.get(self.url, {"sortBy": "owner_name", "sortOrder": "DESC"})
        self.assertEqual(res.data["data"][0]["owner"], "Bernd Merchant Example")

    def test_non_admin_403(self):
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = issue_token_for(self.owner)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class AdminStoreCreateTests(AdminStoresBase):
    def setUp(self):
        super().setUp()
        self.url = reverse("admin-store-list")

    def test_create_store(self):
        payload = {"name": "Fresh Store", "address": "Opening St 1", "owner_id": self.owner.id}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["message"], "Store created successfully")
        self.assertEqual(res.data["data"]["owner_id"], self.owner.id)
        self.assertTrue(Store.objects.filter(name="Fresh Store", owner=self.owner).exists())

    def test_address_is_optional(self):
        res = self.client.post(self.url, {"name": "No Address", "owner_id": self.owner.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["data"]["address"], "")

        res = self.client.post(
            self.url, {"name": "Blank Address", "address": "", "owner_id": self.owner.id}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Store.objects.get(name="Blank Address").address, "")

    def test_address_too_long_400(self):
        payload = {"name": "Fresh Store", "address": "x" * 501, "owner_id": self.owner.id}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("address", res.data["errors"])

    def test_owner_must_be_store_owner(self):
        payload = {"name": "Fresh Store", "address": "Opening St 1", "owner_id": self.user.id}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            res.data["errors"]["owner_id"][0], "Invalid owner ID or owner is not a store owner"
        )
        self.assertFalse(Store.objects.exists())

    def test_unknown_owner_400(self):
        payload = {"name": "Fresh Store", "address": "Opening St 1", "owner_id": 99999}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_fields_400(self):
        res = self.client.post(self.url, {"name": ""}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", res.data["errors"])
        self.assertIn("owner_id", res.data["errors"])

    def test_name_too_long_400(self):
        payload = {"name": "x" * 256, "address": "Opening St 1", "owner_id": self.owner.id}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)


class AdminStoreDeleteTests(AdminStoresBase):
    def test_delete_store_and_ratings(self):
        store = Store.objects.create(name="Doomed", address="Gone St 1", owner=self.owner)
        Rating.objects.create(user=self.user, store=store, score=3)
        keep = Store.objects.create(name="Survivor", address="Stay St 2", owner=self.owner)
        Rating.objects.create(user=self.user, store=keep, score=4)

        res = self.client.delete(reverse("admin-store-delete", kwargs={"pk": store.id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Store deleted successfully")
        self.assertFalse(Store.objects.filter(pk=store.id).exists())
        self.assertEqual(list(Rating.objects.values_list("store_id", flat=True)), [keep.id])

    def test_unknown_store_404(self):
        res = self.client.delete(reverse("admin-store-delete", kwargs={"pk": 424242}))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["message"], "Store not found")
