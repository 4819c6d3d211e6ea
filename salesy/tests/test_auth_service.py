"""
Tests for sign-in handling and login form validation.
"""
import unittest
from unittest.mock import MagicMock

from salesy.db.memory_store import InMemoryStore
from salesy.exceptions import AuthenticationError, ValidationError
from salesy.services.auth_service import (
    AuthService, friendly_auth_message, EMAIL_NOT_CONFIRMED_MESSAGE, INVALID_CREDENTIALS_MESSAGE
)
from salesy.utils.validation import validate_login


class TestValidateLogin(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_login('owner@shop.in', 'secret'), {})

    def test_missing_fields(self):
        self.assertEqual(validate_login('', None), {
            'email': 'Email is required',
            'password': 'Password is required',
        })

    def test_bad_email(self):
        for email in ('owner', 'owner@shop', 'own er@shop.in', '@shop.in'):
            self.assertEqual(validate_login(email, 'x'), {'email': 'Invalid email format'})


class TestFriendlyAuthMessage(unittest.TestCase):

    def test_mapped_messages(self):
        self.assertEqual(friendly_auth_message("Email not confirmed"), EMAIL_NOT_CONFIRMED_MESSAGE)
        self.assertEqual(friendly_auth_message("Invalid login credentials"), INVALID_CREDENTIALS_MESSAGE)
        self.assertEqual(friendly_auth_message("Too many requests"), "Too many requests")


class TestAuthService(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryStore(users={'owner@shop.in': 'secret'})
        self.service = AuthService(self.store)

    def test_sign_in_and_out(self):
        session = self.service.sign_in('owner@shop.in', 'secret')

        self.assertEqual(session.email, 'owner@shop.in')
        self.assertEqual(self.service.current_user(), session.user_id)

        self.service.sign_out()
        self.assertIsNone(self.service.current_user())

    def test_wrong_password(self):
        with self.assertRaises(AuthenticationError) as ctx:
            self.service.sign_in('owner@shop.in', 'guess')
        self.assertEqual(ctx.exception.message, INVALID_CREDENTIALS_MESSAGE)
        self.assertEqual(ctx.exception.code, 'SIGN_IN_FAILED')
        self.assertIsNone(self.service.current_user())

    def test_form_errors_skip_provider(self):
        store = MagicMock()
        with self.assertRaises(ValidationError) as ctx:
            AuthService(store).sign_in('not-an-email', '')

        self.assertEqual(ctx.exception.code, 'INVALID_LOGIN_FORM')
        self.assertEqual(set(ctx.exception.details), {'email', 'password'})
        store.authenticate.assert_not_called()


if __name__ == '__main__':
    unittest.main()
