"""
In-memory backend simulating the service.

Used by test suites for fast, isolated testing without network access. Each
endpoint supplies its own simulation (Request.mock); this backend only owns
the data store those simulations read and write.
"""
import logging
from typing import Any, Dict, Optional

from .base_client import Backend, backend_name
from .store import MockDataStore

logger = logging.getLogger(__name__)

DEFAULT_MOCK_USER = 'admin@example.com'


@backend_name("In Memory")
class MockBackend(Backend):
    """Mock-mode backend running endpoint simulations against a MockDataStore."""

    mocked = True

    def __init__(self, url: str, store: Optional[MockDataStore] = None, username: Optional[str] = None):
        """Initialize with the base URL mock responses report.

        Args:
            url: Base URL used when building envelope and pagination URLs
            store: Data store to simulate against; a fresh one when omitted
            username: Email of the simulated current user
        """
        super().__init__(url)
        self._store = store if store is not None else MockDataStore()
        self.username = username or DEFAULT_MOCK_USER
        self.current_user_id: Optional[int] = None

    @property
    def store(self) -> MockDataStore:
        return self._store

    def current_user(self) -> Dict[str, Any]:
        """Return the simulated current user, creating it on first use."""
        users = self._store['users']
        if self.current_user_id not in users:
            record = self._store.insert('users', {
                'name': self.username.split('@')[0],
                'email': self.username,
                'role': 'admin',
                'active': True,
            })
            self.current_user_id = record['id']
            logger.debug(f"Created simulated current user {self.current_user_id}")
        return users[self.current_user_id]

    def dispatch(self, request):
        """Run the endpoint's simulation."""
        logger.debug(f"Simulating {request.name}")
        return request.mock()
