from django.conf import settings
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from user_auth_app.tokens import issue_token_for

User = get_user_model()


def make_user(email="self.service@example.com", role=None):
    return User.objects.create_user(
        email=email,
        password="Secret#Pass1",
        name="Self Service Test Person",
        address="Old Address 1",
        role=role or User.Role.USER,
    )


class ChangePasswordTests(APITestCase):
    def setUp(self):
        self.url = reverse("auth-change-password")
        self.user = make_user()
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = issue_token_for(self.user)

    def test_change_password_success(self):
        res = self.client.post(
            self.url, {"currentPassword": "Secret#Pass1", "newPassword": "Fresh#Pass22"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Password changed successfully")
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Fresh#Pass22"))

    def test_wrong_current_password_400(self):
        res = self.client.post(
            self.url, {"currentPassword": "Nope#Pass1", "newPassword": "Fresh#Pass22"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], "Current password is incorrect")
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Secret#Pass1"))

    def test_weak_new_password_400(self):
        res = self.client.post(
            self.url, {"currentPassword": "Secret#Pass1", "newPassword": "lowercase1"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("newPassword", res.data["errors"])

    def test_unauthenticated_401(self):
        self.client.cookies.clear()
        res = self.client.post(
            self.url, {"currentPassword": "Secret#Pass1", "newPassword": "Fresh#Pass22"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_old_session_stays_valid_after_change(self):
        self.client.post(
            self.url, {"currentPassword": "Secret#Pass1", "newPassword": "Fresh#Pass22"}, format="json"
        )
        res = self.client.get(reverse("auth-me"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)


class UpdatePasswordTests(APITestCase):
    def setUp(self):
        self.url = reverse("user-update-password")
        self.user = make_user(role=User.Role.STORE_OWNER)
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = issue_token_for(self.user)

    def test_update_password_success(self):
        payload = {
            "currentPassword": "Secret#Pass1",
            "newPassword": "Fresh#Pass22",
            "confirmPassword": "Fresh#Pass22",
        }
        res = self.client.put(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Password updated successfully")
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("Fresh#Pass22"))

    def test_confirmation_mismatch_400(self):
        payload = {
            "currentPassword": "Secret#Pass1",
            "newPassword": "Fresh#Pass22",
            "confirmPassword": "Other#Pass22",
        }
        res = self.client.put(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("confirmPassword", res.data["errors"])

    def test_wrong_current_password_400(self):
        payload = {
            "currentPassword": "Wrong#Pass1",
            "newPassword": "Fresh#Pass22",
            "confirmPassword": "Fresh#Pass22",
        }
        res = self.client.put(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], "Current password is incorrect")


class ProfileTests(APITestCase):
    def setUp(self):
        self.url = reverse("user-profile")
        self.user = make_user()
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = issue_token_for(self.user)

    def test_get_profile(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["name"], "Self Service Test Person")
        self.assertEqual(res.data["data"]["address"], "Old Address 1")

    def test_update_address_only(self):
        res = self.client.put(self.url, {"address": "New Address 22"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Profile updated successfully")
        self.user.refresh_from_db()
        self.assertEqual(self.user.address, "New Address 22")
        self.assertEqual(self.user.name, "Self Service Test Person")

    def test_update_name(self):
        res = self.client.put(self.url, {"name": "Completely Renamed Person"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["name"], "Completely Renamed Person")

    def test_short_name_400(self):
        res = self.client.put(self.url, {"name": "Shorty"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", res.data["errors"])

    def test_empty_update_400(self):
        res = self.client.put(self.url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_role_cannot_be_changed(self):
        res = self.client.put(self.url, {"address": "Somewhere", "role": "ADMIN"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, User.Role.USER)
