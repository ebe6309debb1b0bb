"""
Helpdesk API client.

Typed, declarative calls against the helpdesk REST API, executed either over
HTTP or against an in-memory simulation of the service.
"""

from .api_client import Client, Envelope, MockDataStore, create_client
from .config import load_settings
from .exceptions import ConfigurationError, HelpdeskError, InvalidRecordError, NotFoundError

# Registers the bundled endpoints
from . import endpoints  # noqa: F401,E402

__version__ = '0.1.0'

__all__ = [
    'Client',
    'ConfigurationError',
    'create_client',
    'Envelope',
    'HelpdeskError',
    'InvalidRecordError',
    'load_settings',
    'MockDataStore',
    'NotFoundError',
]
