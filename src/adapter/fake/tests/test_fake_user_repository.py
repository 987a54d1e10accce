"""Unit tests for fake repositories — verifies Port contract compliance."""

import unittest
from datetime import datetime, timezone

from adapter.fake.refresh_token_repository import FakeRefreshTokenRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError
from domain.model.user import Role, User


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_create_and_find_by_email(self):
        created = self.repo.create('Ann Lee', 'a@example.com', 'hash', Role.VICE_PRESIDENT)

        found = self.repo.find_by_email('a@example.com')
        self.assertIsInstance(found, User)
        self.assertEqual(found.id, created.id)
        self.assertTrue(found.is_active)

    def test_create_duplicate_email_raises(self):
        self.repo.create('Ann Lee', 'a@example.com', 'hash', Role.VICE_PRESIDENT)

        with self.assertRaises(DuplicateError):
            self.repo.create('Other', 'a@example.com', 'hash', Role.VICE_PRESIDENT)

    def test_find_by_email_returns_none_for_missing(self):
        self.assertIsNone(self.repo.find_by_email('nobody@example.com'))

    def test_get_by_id(self):
        created = self.repo.create('Ann Lee', 'a@example.com', 'hash', Role.VICE_PRESIDENT)

        self.assertEqual(self.repo.get_by_id(created.id), created)
        self.assertIsNone(self.repo.get_by_id('nonexistent'))

    def test_deactivate(self):
        created = self.repo.create('Ann Lee', 'a@example.com', 'hash', Role.VICE_PRESIDENT)

        self.assertTrue(self.repo.deactivate(created.id))
        self.assertFalse(self.repo.get_by_id(created.id).is_active)
        self.assertFalse(self.repo.deactivate('nonexistent'))


class TestFakeRefreshTokenRepository(unittest.TestCase):

    def test_create_and_find_by_user(self):
        repo = FakeRefreshTokenRepository()
        expires_at = datetime(2026, 2, 1, tzinfo=timezone.utc)

        repo.create('t1', 'user-1', expires_at)
        repo.create('t2', 'user-1', expires_at)
        repo.create('t3', 'user-2', expires_at)

        self.assertEqual({t.token for t in repo.find_by_user('user-1')}, {'t1', 't2'})
        self.assertEqual(repo.store['t3'].expires_at, expires_at)


if __name__ == '__main__':
    unittest.main()
