"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.user import User
from port.user_repository import UniqueViolation


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── insert + find_by_id ───────────────────────────────────

    def test_insert_assigns_sequential_ids(self):
        first = self.repo.insert(name='Ana', email='ana@example.com')
        second = self.repo.insert(name='Bea', email='bea@example.com')

        self.assertEqual((first.id, second.id), (1, 2))
        self.assertEqual(self.repo.find_by_id(2), User(id=2, name='Bea', email='bea@example.com'))

    def test_find_by_id_returns_none_for_missing(self):
        self.assertIsNone(self.repo.find_by_id(1))

    def test_insert_duplicate_email_raises(self):
        self.repo.insert(name='Ana', email='ana@example.com')

        with self.assertRaises(UniqueViolation) as ctx:
            self.repo.insert(name='Bea', email='ana@example.com')

        self.assertEqual(ctx.exception.field, 'email')
        self.assertEqual(self.repo.count(), 1)

    def test_ids_are_not_reused_after_delete(self):
        user = self.repo.insert(name='Ana', email='ana@example.com')
        self.repo.delete(user.id)

        again = self.repo.insert(name='Ana', email='ana@example.com')

        self.assertEqual(again.id, 2)

    def test_returned_users_are_copies(self):
        user = self.repo.insert(name='Ana', email='ana@example.com')
        user.name = 'Mutated'

        self.assertEqual(self.repo.find_by_id(user.id).name, 'Ana')

    # ── find_many + count ─────────────────────────────────────

    def test_find_many_orders_by_id_and_pages(self):
        for i in range(5):
            self.repo.insert(name=f'U{i}', email=f'u{i}@example.com')

        self.assertEqual([u.id for u in self.repo.find_many(0, 2)], [1, 2])
        self.assertEqual([u.id for u in self.repo.find_many(4, 2)], [5])
        self.assertEqual(self.repo.find_many(10, 2), [])
        self.assertEqual(self.repo.count(), 5)

    # ── update ────────────────────────────────────────────────

    def test_update_applies_changes(self):
        user = self.repo.insert(name='Ana', email='ana@example.com')

        updated = self.repo.update(user.id, {'email': 'ana2@example.com'})

        self.assertEqual(updated, User(id=user.id, name='Ana', email='ana2@example.com'))

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.repo.update(3, {'name': 'X'}))

    def test_update_duplicate_email_raises(self):
        self.repo.insert(name='Ana', email='ana@example.com')
        bea = self.repo.insert(name='Bea', email='bea@example.com')

        with self.assertRaises(UniqueViolation):
            self.repo.update(bea.id, {'email': 'ana@example.com'})

        self.assertEqual(self.repo.find_by_id(bea.id).email, 'bea@example.com')

    # ── delete ────────────────────────────────────────────────

    def test_delete(self):
        user = self.repo.insert(name='Ana', email='ana@example.com')

        self.assertTrue(self.repo.delete(user.id))
        self.assertFalse(self.repo.delete(user.id))
        self.assertIsNone(self.repo.find_by_id(user.id))


if __name__ == '__main__':
    unittest.main()
