"""Unit tests for the User model and its public projection."""

import unittest
from dataclasses import fields
from datetime import datetime, timezone

from domain.model.user import (
    NewUser,
    PublicUser,
    SignupMethod,
    User,
    UserChanges,
    to_public,
)

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def _make_user(**kwargs) -> User:
    defaults = {
        "id": "user-1",
        "username": "alice",
        "email": "a@x.com",
        "first_name": "Alice",
        "last_name": "Liddell",
        "signup_method": SignupMethod.LOCAL,
        "created_at": NOW,
        "updated_at": NOW,
        "email_verified": True,
        "password_hash": "$2b$10$abcdefghijklmnopqrstuu",
    }
    defaults.update(kwargs)
    return User(**defaults)


class TestToPublic(unittest.TestCase):

    def test_copies_every_public_field(self):
        public = to_public(_make_user())

        self.assertEqual(public.id, "user-1")
        self.assertEqual(public.username, "alice")
        self.assertEqual(public.email, "a@x.com")
        self.assertEqual(public.first_name, "Alice")
        self.assertEqual(public.last_name, "Liddell")
        self.assertTrue(public.email_verified)
        self.assertEqual(public.signup_method, SignupMethod.LOCAL)
        self.assertEqual(public.created_at, NOW)
        self.assertEqual(public.updated_at, NOW)

    def test_public_user_has_no_hash_slot(self):
        public = to_public(_make_user())

        self.assertNotIn('password_hash', {f.name for f in fields(PublicUser)})
        self.assertFalse(hasattr(public, 'password_hash'))

    def test_to_dict_never_contains_hash(self):
        user = _make_user(password_hash="$2b$10$secret-material")
        data = to_public(user).to_dict()

        self.assertNotIn('password_hash', data)
        self.assertNotIn("$2b$10$secret-material", data.values())
        self.assertEqual(data['signup_method'], 'local')

    def test_projection_is_immutable(self):
        public = to_public(_make_user())
        with self.assertRaises(Exception):
            public.username = "mallory"

    def test_repr_omits_hash(self):
        self.assertNotIn("$2b$", repr(_make_user()))


class TestUserChanges(unittest.TestCase):

    def test_supplied_only_returns_given_fields(self):
        changes = UserChanges(last_name="Smith")
        self.assertEqual(changes.supplied(), {"last_name": "Smith"})

    def test_supplied_keeps_false_and_empty_values(self):
        changes = UserChanges(email_verified=False, first_name="")
        self.assertEqual(changes.supplied(), {"email_verified": False, "first_name": ""})

    def test_empty_changes(self):
        self.assertEqual(UserChanges().supplied(), {})


class TestNewUser(unittest.TestCase):

    def test_defaults(self):
        new_user = NewUser(username="bob", email="b@x.com", password="secret1",
                           signup_method=SignupMethod.GOOGLE)
        self.assertEqual(new_user.first_name, '')
        self.assertEqual(new_user.last_name, '')
        self.assertFalse(new_user.email_verified)


if __name__ == '__main__':
    unittest.main()
