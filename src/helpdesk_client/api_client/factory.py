"""
Client construction.

The backend (real or mock) is chosen once, when the client is built, from the
client settings. Every registered endpoint is then callable as a method:

    client = create_client(load_settings(mock=True))
    client.get_user({'user_id': 1})
"""
import functools
import logging
from typing import Optional

import requests

from ..config.settings import ClientSettings, get_settings
from ..request.descriptor import get_endpoint, is_registered
from .base_client import Backend, get_backend_friendly_name
from .in_memory_client import MockBackend
from .remote_client import RemoteBackend
from .store import MockDataStore

logger = logging.getLogger(__name__)


class Client:
    """Entry point for calling endpoints through a backend."""

    def __init__(self, backend: Backend):
        self.backend = backend

    def __repr__(self):
        return f"<Client {self.backend!r}>"

    @property
    def url(self) -> str:
        return self.backend.url

    @property
    def mocked(self) -> bool:
        return self.backend.mocked

    @property
    def data(self) -> Optional[MockDataStore]:
        """The mock data store, or None in real mode."""
        return self.backend.store

    @property
    def last_request(self):
        """Body of the last simulated request (mock mode only)."""
        return self.data.last_request if self.data is not None else None

    def reset(self) -> None:
        """Empty the mock data store (no-op in real mode)."""
        if self.data is not None:
            self.data.reset()

    def request(self, name: str, *args):
        """Call the endpoint registered under name."""
        endpoint_class = get_endpoint(name)
        return endpoint_class(self).call(*args)

    def __getattr__(self, name: str):
        if not name.startswith('_') and is_registered(name):
            return functools.partial(self.request, name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")


def create_client(settings: Optional[ClientSettings] = None, store: Optional[MockDataStore] = None,
                  session: Optional[requests.Session] = None) -> Client:
    """Create a client for the configured backend.

    Args:
        settings: Client settings; loaded from config/environment when omitted
        store: Data store for mock mode; a fresh one when omitted
        session: requests Session for real mode
    """
    if settings is None:
        settings = get_settings()

    if settings.mock:
        backend = MockBackend(settings.url, store=store, username=settings.username)
    else:
        backend = RemoteBackend(settings.url, session=session, auth=settings.auth, timeout=settings.timeout)

    logger.debug(f"Created client using {get_backend_friendly_name(type(backend))} backend for {settings.url}")
    return Client(backend)
