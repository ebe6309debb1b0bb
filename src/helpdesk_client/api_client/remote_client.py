"""
Remote HTTP backend using the requests library.

Used in real mode to talk to the live service.
"""
import logging
from typing import Any, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

import requests

from ..request.base import API_PREFIX
from ..request.params import decode_query, encode_query
from .base_client import Backend, backend_name
from .response import Envelope, raise_for_status, wrap_transport_error

logger = logging.getLogger(__name__)


REQUEST_HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}


@backend_name("HTTP")
class RemoteBackend(Backend):
    """Real-mode backend sending requests over HTTP."""

    def __init__(self, url: str, session: Optional[requests.Session] = None,
                 auth: Optional[Tuple[str, str]] = None, timeout: float = 30.0):
        """Initialize with the service's base URL.

        Args:
            url: Base URL of the service (e.g., https://acme.example.com)
            session: Optional requests Session to send requests with
            auth: Optional basic auth credentials
            timeout: Seconds to wait for the service before giving up
        """
        super().__init__(url)
        self.session = session or requests.Session()
        self.timeout = timeout
        if auth:
            self.session.auth = auth

    def _target(self, request) -> Tuple[str, dict]:
        """Resolve the URL and query parameters of a request.

        An explicit 'url' param (a followed pagination link) takes precedence
        over the path generator; its query merges under the request params.
        """
        params = dict(request.request_params() or {})
        if request.url:
            parts = urlsplit(request.url)
            merged = decode_query(parts.query)
            merged.update(params)
            return urlunsplit((parts.scheme, parts.netloc, parts.path, '', '')), merged
        return f"{self.url}{API_PREFIX}/{request.request_path().lstrip('/')}", params

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def dispatch(self, request) -> Envelope:
        """Send the request over HTTP."""
        method = request.method
        url, params = self._target(request)
        body = request.request_body()

        logger.debug(f"HTTP {method.upper()} {url} params={params}")
        try:
            response = self.session.request(
                method.upper(),
                url,
                params=encode_query(params) or None,
                json=body,
                headers=dict(REQUEST_HEADERS),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"HTTP {method.upper()} {url} failed: {e}")
            raise wrap_transport_error(e, method, url) from e

        request_headers = dict(REQUEST_HEADERS)
        if response.request is not None:
            request_headers = dict(response.request.headers)

        envelope = Envelope(
            method=method,
            url=response.url or url,
            status=response.status_code,
            body=self._parse_body(response),
            request_body=body,
            request_headers=request_headers,
            response_headers=dict(response.headers),
        )
        logger.debug(f"HTTP {method.upper()} {envelope.url} -> {envelope.status}")
        return raise_for_status(envelope)
