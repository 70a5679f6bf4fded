"""Unit tests for the user domain model."""

import unittest

from domain.model.errors import ConflictError, DomainError
from domain.model.user import UserChanges, UserPage


class TestUserPage(unittest.TestCase):
    def test_total_pages_rounds_up(self):
        self.assertEqual(UserPage(total=21, limit=10).total_pages, 3)
        self.assertEqual(UserPage(total=20, limit=10).total_pages, 2)
        self.assertEqual(UserPage(total=1, limit=10).total_pages, 1)

    def test_total_pages_empty(self):
        self.assertEqual(UserPage(total=0, limit=10).total_pages, 0)


class TestUserChanges(unittest.TestCase):
    def test_defaults_to_no_changes(self):
        changes = UserChanges()

        self.assertIsNone(changes.name)
        self.assertIsNone(changes.email)


class TestConflictError(unittest.TestCase):
    def test_carries_field(self):
        error = ConflictError('email', "Email already registered")

        self.assertIsInstance(error, DomainError)
        self.assertEqual(error.field, 'email')
        self.assertEqual(str(error), "Email already registered")
