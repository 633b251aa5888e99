from django.http import Http404
from django.test import SimpleTestCase, override_settings
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError

from common.exceptions import Conflict, TransientFailure, api_exception_handler


class ApiExceptionHandlerTests(SimpleTestCase):
    def handle(self, exc):
        return api_exception_handler(exc, {"view": None})

    def test_validation_error_envelope(self):
        res = self.handle(ValidationError({"email": ["Enter a valid email address."]}))
        self.assertEqual(res.status_code, 400)
        self.assertEqual(
            res.data,
            {
                "success": False,
                "message": "Validation failed",
                "errors": {"email": ["Enter a valid email address."]},
            },
        )

    def test_not_authenticated_message(self):
        res = self.handle(NotAuthenticated())
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["message"], "Access denied. No token provided.")

    def test_not_found_keeps_detail(self):
        res = self.handle(NotFound("Store not found"))
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data, {"success": False, "message": "Store not found"})

    def test_django_404_is_translated(self):
        res = self.handle(Http404("Nope"))
        self.assertEqual(res.status_code, 404)
        self.assertFalse(res.data["success"])

    def test_conflict_409(self):
        res = self.handle(Conflict("User with this email already exists"))
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["message"], "User with this email already exists")

    def test_transient_failure_500(self):
        res = self.handle(TransientFailure())
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data["message"], "The operation could not be completed. Please try again.")

    @override_settings(DEBUG=False)
    def test_unhandled_exception_hides_detail(self):
        with self.assertLogs("common.exceptions", level="ERROR"):
            res = self.handle(RuntimeError("secret internals"))
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data["message"], "Internal server error")
        self.assertNotIn("secret internals", str(res.data))

    @override_settings(DEBUG=True)
    def test_unhandled_exception_detail_in_debug(self):
        with self.assertLogs("common.exceptions", level="ERROR"):
            res = self.handle(RuntimeError("secret internals"))
        self.assertEqual(res.data["error"], "secret internals")
