from django.conf import settings
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from user_auth_app.tokens import verify_token

User = get_user_model()

VALID_NAME = "Maximilian Mustermann"


class SignupTests(APITestCase):
    def setUp(self):
        self.url = reverse("auth-signup")
        self.payload = {
            "email": "new.user@example.com",
            "password": "Secret#Pass1",
            "name": VALID_NAME,
            "address": "Hauptstrasse 1, Berlin",
        }

    def test_signup_success_201_sets_cookie(self):
        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["message"], "User registered successfully")
        self.assertEqual(res.data["user"]["email"], "new.user@example.com")
        self.assertEqual(res.data["user"]["role"], "USER")
        self.assertNotIn("password", res.data["user"])

        cookie = res.cookies[settings.SESSION_TOKEN_COOKIE]
        self.assertTrue(cookie["httponly"])
        self.assertEqual(cookie["samesite"], "Strict")
        claims = verify_token(cookie.value)
        self.assertEqual(claims.user_id, res.data["user"]["id"])
        self.assertEqual(claims.role, "USER")

    def test_password_is_stored_hashed(self):
        self.client.post(self.url, self.payload, format="json")
        user = User.objects.get(email="new.user@example.com")
        self.assertNotEqual(user.password, "Secret#Pass1")
        self.assertTrue(user.check_password("Secret#Pass1"))

    def test_role_in_payload_is_ignored(self):
        res = self.client.post(self.url, {**self.payload, "role": "ADMIN"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(User.objects.get(email="new.user@example.com").role, User.Role.USER)

    def test_email_is_lowercased(self):
        res = self.client.post(self.url, {**self.payload, "email": "New.User@Example.COM"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["user"]["email"], "new.user@example.com")

    def test_duplicate_email_409(self):
        User.objects.create_user(email="new.user@example.com", password="Secret#Pass1", name=VALID_NAME)
        res = self.client.post(self.url, {**self.payload, "email": "NEW.user@example.com"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(res.data["success"])
        self.assertEqual(User.objects.count(), 1)

    def test_weak_password_400(self):
        res = self.client.post(self.url, {**self.payload, "password": "weakpass"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["message"], "Validation failed")
        self.assertIn("password", res.data["errors"])
        self.assertFalse(User.objects.exists())

    def test_password_too_long_400(self):
        res = self.client.post(self.url, {**self.payload, "password": "Abcdefgh#12345678"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", res.data["errors"])

    def test_short_name_400(self):
        res = self.client.post(self.url, {**self.payload, "name": "Too Short"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", res.data["errors"])

    def test_invalid_email_400(self):
        res = self.client.post(self.url, {**self.payload, "email": "not-an-email"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", res.data["errors"])

    def test_address_too_long_400(self):
        res = self.client.post(self.url, {**self.payload, "address": "x" * 401}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("address", res.data["errors"])

    def test_address_is_optional(self):
        payload = {k: v for k, v in self.payload.items() if k != "address"}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["user"]["address"], "")
