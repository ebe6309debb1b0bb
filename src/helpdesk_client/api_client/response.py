"""
Response envelope shared by the real and mock backends.

Provides one shape for every call regardless of which backend produced it.
"""
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional

import requests

from ..exceptions import HelpdeskError, error_for_response


DEFAULT_REQUEST_HEADERS = {'Accept': 'application/json'}
DEFAULT_RESPONSE_HEADERS = {'Content-Type': 'application/json; charset=utf-8'}


@dataclass(frozen=True)
class Envelope:
    """Unified request/response record for both real and mock backends.

    Built fresh per call and never mutated afterwards.
    """
    method: str
    url: str
    status: int = 200
    body: Any = None
    request_body: Any = None
    request_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REQUEST_HEADERS))
    response_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_RESPONSE_HEADERS))

    @property
    def status_code(self) -> int:
        """Alias of status (for compatibility with requests.Response)."""
        return self.status

    @property
    def success(self) -> bool:
        return self.status < 400

    def json(self) -> Any:
        """Return the response body."""
        return self.body

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Look up a key in a mapping body."""
        if isinstance(self.body, dict):
            return self.body.get(key, default)
        return default

    @property
    def text(self) -> str:
        """Return the response body as text."""
        if isinstance(self.body, str):
            return self.body
        return str(self.body)


def raise_for_status(envelope: Envelope) -> Envelope:
    """Return the envelope, or raise the HelpdeskError matching its status.

    Success or failure is decided by requests' own classification: 4xx and 5xx
    fail.

    Raises:
        HelpdeskError: If the status indicates failure.
    """
    raw = requests.Response()
    raw.status_code = envelope.status
    raw.url = envelope.url
    try:
        raw.reason = HTTPStatus(envelope.status).phrase
    except ValueError:
        raw.reason = None

    try:
        raw.raise_for_status()
    except requests.RequestException as e:
        raise error_for_response(envelope, str(e)) from e
    return envelope


def wrap_transport_error(error: requests.RequestException, method: str, url: str) -> HelpdeskError:
    """Wrap a transport failure that produced no response into a HelpdeskError."""
    return HelpdeskError(f"{method.upper()} {url} failed: {error}")
