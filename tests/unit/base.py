"""Base test class for mock-mode unit tests."""

import unittest

from helpdesk_client.api_client import MockDataStore, create_client
from helpdesk_client.config.settings import ClientSettings

TEST_URL = "https://acme.example.com"


class BaseMockTest(unittest.TestCase):
    """Base test class providing a mock-mode client over a fresh data store."""

    def setUp(self):
        """Set up a fresh store and client."""
        self.store = MockDataStore()
        self.client = create_client(ClientSettings(url=TEST_URL, mock=True), store=self.store)

    def tearDown(self):
        """Empty the store."""
        self.store.reset()

    def seed_users(self, count: int):
        """Insert users 1..count named user-<id>."""
        for identity in range(1, count + 1):
            self.store.insert('users', {'id': identity, 'name': f'user-{identity}', 'email': f'user{identity}@example.com'})

    def seed_memberships(self, memberships):
        """Insert (user_id, organization_id) pairs as memberships, ids from 1."""
        for identity, (user_id, organization_id) in enumerate(memberships, start=1):
            self.store.insert('memberships', {
                'id': identity,
                'user_id': user_id,
                'organization_id': organization_id,
            })
