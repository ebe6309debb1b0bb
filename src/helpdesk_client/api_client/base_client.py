"""
Base backend abstract class.

Provides a consistent call contract regardless of whether requests are sent
over HTTP or simulated in memory.
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, Type

# Registry for backend friendly names
_backend_friendly_names: Dict[Type, str] = {}


def backend_name(friendly_name: str) -> Callable:
    """
    Decorator to assign a friendly name to a backend class.

    Usage:
        @backend_name("In Memory")
        class MockBackend(Backend):
            pass
    """
    def decorator(cls: Type) -> Type:
        _backend_friendly_names[cls] = friendly_name
        return cls
    return decorator


def get_backend_friendly_name(backend_class: Type) -> str:
    """Get the friendly name of a backend class, or its class name if undecorated."""
    return _backend_friendly_names.get(backend_class, backend_class.__name__)


class Backend(ABC):
    """Abstract base class of the real and mock backends.

    Each backend executes a fully normalized Request and returns its Envelope.
    """

    mocked: bool = False

    def __init__(self, url: str):
        self.url = url.rstrip('/')

    @property
    def store(self):
        """The mock data store (None for backends without one)."""
        return None

    @abstractmethod
    def dispatch(self, request):
        """Execute the request and return its Envelope."""
        pass

    def __repr__(self):
        return f"<{get_backend_friendly_name(self.__class__)} backend {self.url}>"
