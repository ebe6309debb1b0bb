"""
Declarative request definitions.

Endpoints subclass Request, declare a RequestDescriptor and register a name.
"""

from .base import Request
from .descriptor import HTTPMethod, RequestDescriptor, register
from .errors import ErrorKind, ErrorSpec, error_catalog

__all__ = [
    'ErrorKind',
    'ErrorSpec',
    'error_catalog',
    'HTTPMethod',
    'register',
    'Request',
    'RequestDescriptor',
]
