"""
Pytest plugin providing mock-mode clients to test suites.

Registered through the pytest11 entry point, so any project installing the
package gets the fixtures:

    def test_lookup(helpdesk_client, helpdesk_store):
        helpdesk_store.insert('users', {'id': 1, 'name': 'Ada'})
        assert helpdesk_client.get_user({'user_id': 1}).body['user']['name'] == 'Ada'
"""

import pytest

from helpdesk_client.api_client import MockDataStore, create_client
from helpdesk_client.config.settings import DEFAULT_MOCK_URL, ClientSettings, reset_settings


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    parser.addoption(
        "--helpdesk-url",
        action="store",
        default=DEFAULT_MOCK_URL,
        help="Base URL reported by mock-mode helpdesk clients"
    )


def pytest_sessionstart(session):
    """Clear the settings cache so each session loads fresh settings."""
    reset_settings()


@pytest.fixture
def helpdesk_store():
    """A fresh mock data store, emptied again after the test."""
    store = MockDataStore()
    yield store
    store.reset()


@pytest.fixture
def helpdesk_client(request, helpdesk_store):
    """A mock-mode client bound to helpdesk_store."""
    url = request.config.getoption("--helpdesk-url")
    settings = ClientSettings(url=url, mock=True)
    return create_client(settings, store=helpdesk_store)
