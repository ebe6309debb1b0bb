"""
Declarative endpoint configuration and the endpoint registry.

Every endpoint class declares one RequestDescriptor and registers itself under
a name with the @register decorator. Clients look endpoints up by that name.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Type

from .errors import DEFAULT_ERROR_CATALOG, ErrorKind, ErrorSpec

logger = logging.getLogger(__name__)


class HTTPMethod(str, Enum):
    GET = 'get'
    POST = 'post'
    PUT = 'put'
    DELETE = 'delete'
    PATCH = 'patch'


@dataclass(frozen=True)
class RequestDescriptor:
    """Static configuration of one endpoint.

    Attributes:
        method: HTTP method of the endpoint.
        path: Callable receiving the request instance and returning the path
              below /api/v2. Required; a missing one fails at call time.
        body: Optional callable returning the request body.
        params: Optional callable returning extra query/body parameters.
        paginated: Whether the endpoint accepts page/per_page parameters.
        errors: Error catalog used by the endpoint's mock implementation.
    """
    method: HTTPMethod = HTTPMethod.GET
    path: Optional[Callable[[Any], str]] = None
    body: Optional[Callable[[Any], Any]] = None
    params: Optional[Callable[[Any], Optional[Mapping[str, Any]]]] = None
    paginated: bool = False
    errors: Mapping[ErrorKind, ErrorSpec] = field(default_factory=lambda: DEFAULT_ERROR_CATALOG)


# Registry of endpoint classes by name
_endpoints: Dict[str, Type] = {}


def register(name: str) -> Callable:
    """
    Decorator to register an endpoint class under a name.

    Registration is first-wins: a second class registered under the same name
    is ignored (with a warning) and the original stays in place.

    Usage:
        @register("get_user")
        class GetUser(Request):
            ...
    """
    def decorator(cls: Type) -> Type:
        existing = _endpoints.get(name)
        if existing is not None and existing is not cls:
            logger.warning(f"Endpoint '{name}' already registered by {existing.__name__}; ignoring {cls.__name__}")
            return cls
        cls.endpoint_name = name
        _endpoints[name] = cls
        logger.debug(f"Registered endpoint '{name}' -> {cls.__name__}")
        return cls
    return decorator


def get_endpoint(name: str) -> Type:
    """Get the endpoint class registered under name.

    Raises:
        KeyError: If no endpoint is registered under name.
    """
    try:
        return _endpoints[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint '{name}'. Available endpoints: {', '.join(sorted(_endpoints))}")


def is_registered(name: str) -> bool:
    return name in _endpoints


def registered_endpoints() -> Dict[str, Type]:
    """Return a snapshot of the registry."""
    return dict(_endpoints)
