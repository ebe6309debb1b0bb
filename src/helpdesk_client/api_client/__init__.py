"""
API client package.

Provides the real (HTTP) and mock (in-memory) backends behind one client.
"""

from .base_client import Backend
from .factory import Client, create_client
from .in_memory_client import MockBackend
from .remote_client import RemoteBackend
from .response import Envelope
from .store import MockDataStore

__all__ = [
    'Backend',
    'Client',
    'create_client',
    'Envelope',
    'MockBackend',
    'MockDataStore',
    'RemoteBackend',
]
