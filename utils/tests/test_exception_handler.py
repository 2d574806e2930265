from django.test import TestCase, override_settings
from rest_framework import exceptions, status

from marketplace.tests.factories import AdminFactory, UserFactory
from utils.exception_handler import api_exception_handler
from utils.logging_utils import mask_account_number
from utils.rbac import is_admin


class ApiExceptionHandlerTest(TestCase):
    def test_validation_error_keeps_fields(self):
        exc = exceptions.ValidationError({"quantity": ["Ensure this value is greater than or equal to 1."]})

        response = api_exception_handler(exc, {})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertIn("quantity", response.data["detail"])
        self.assertIn("quantity", response.data["fields"])

    def test_not_found(self):
        response = api_exception_handler(exceptions.NotFound("Order not found"), {})

        self.assertEqual(response.data, {"error": "not_found", "detail": "Order not found"})

    def test_permission_denied(self):
        response = api_exception_handler(exceptions.PermissionDenied(), {})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "permission_denied")

    @override_settings(DEBUG=False)
    def test_unhandled_exception_is_redacted(self):
        with self.assertLogs("utils.exception_handler", level="ERROR"):
            response = api_exception_handler(RuntimeError("db password in message"), {})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "internal_error")
        self.assertNotIn("password", response.data["detail"])


class RbacTest(TestCase):
    def test_is_admin(self):
        self.assertTrue(is_admin(AdminFactory()))
        self.assertFalse(is_admin(UserFactory()))

    def test_role_read_from_database(self):
        user = UserFactory()
        user.role = "admin"

        self.assertFalse(is_admin(user))


class MaskAccountNumberTest(TestCase):
    def test_mask(self):
        self.assertEqual(mask_account_number("123456789012"), "********9012")
        self.assertEqual(mask_account_number("123"), "123")
        self.assertEqual(mask_account_number(""), "")
