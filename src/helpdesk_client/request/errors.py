"""
Catalog of simulated API errors.

Each endpoint carries a mapping from ErrorKind to the HTTP status and body the
real service answers with. Mock implementations raise them through
Request.error so that a simulated failure looks exactly like a real one.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class ErrorKind(Enum):
    """Symbolic error kinds an endpoint can simulate."""
    INVALID = 'invalid'
    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    CONFLICT = 'conflict'


@dataclass(frozen=True)
class ErrorSpec:
    """HTTP status plus body template of one simulated error."""
    status: int
    body: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not 400 <= self.status < 600:
            raise ValueError(f"Error status must be 4xx or 5xx, got {self.status}")

    def render(self, details: Optional[Any] = None) -> Dict[str, Any]:
        """Return a fresh body, with 'details' merged in when given."""
        body = copy.deepcopy(dict(self.body))
        if details:
            body['details'] = details
        return body


DEFAULT_ERROR_CATALOG: Mapping[ErrorKind, ErrorSpec] = MappingProxyType({
    ErrorKind.INVALID: ErrorSpec(422, {
        'error': 'RecordInvalid',
        'description': 'Record validation errors',
    }),
    ErrorKind.NOT_FOUND: ErrorSpec(404, {
        'error': 'RecordNotFound',
        'description': 'Not found',
    }),
})


def error_catalog(overrides: Optional[Mapping[ErrorKind, ErrorSpec]] = None) -> Mapping[ErrorKind, ErrorSpec]:
    """Build a read-only catalog: the defaults extended/overridden by overrides."""
    catalog = dict(DEFAULT_ERROR_CATALOG)
    if overrides:
        catalog.update(overrides)
    return MappingProxyType(catalog)
