"""
Base class of every endpoint.

A Request subclass declares a RequestDescriptor and a mock() method. Calling
it normalizes the caller's parameters, then hands the instance to the client's
backend, which either sends it over HTTP (using request_path, request_body and
request_params) or runs mock() against the in-memory data store.

The helpers below (find, delete, error, resources, page, response) exist for
mock() implementations: they read and mutate the data store and build the same
envelopes, successful or raised, that the real service would produce.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from urllib.parse import urlsplit

from ..api_client.response import (
    DEFAULT_REQUEST_HEADERS,
    DEFAULT_RESPONSE_HEADERS,
    Envelope,
    raise_for_status,
)
from ..exceptions import ConfigurationError, HelpdeskError
from .descriptor import HTTPMethod, RequestDescriptor
from .errors import ErrorKind
from .pagination import paginate
from .params import decode_query, encode_query, page_params, stringify_keys

logger = logging.getLogger(__name__)

API_PREFIX = '/api/v2'


def _join(base: str, *parts: str) -> str:
    url = base.rstrip('/')
    for part in parts:
        part = str(part).strip('/')
        if part:
            url = f"{url}/{part}"
    return url


class Request:
    """A single call against one endpoint."""

    descriptor: RequestDescriptor = RequestDescriptor()
    endpoint_name: Optional[str] = None

    def __init__(self, client):
        self.client = client
        self.params: Dict[str, Any] = {}
        self.page_params: Optional[Dict[str, Any]] = None
        self.url: Optional[str] = None

    def __repr__(self):
        return f"<{self.__class__.__name__} params={self.params!r}>"

    @property
    def name(self) -> str:
        return self.endpoint_name or self.__class__.__name__

    def call(self, *args):
        """Run the request.

        If the last positional argument is a mapping it is used as the
        parameters, otherwise the request runs with no parameters.

        Returns:
            The Envelope of the call.

        Raises:
            HelpdeskError: If the service (real or simulated) reports a failure.
            ConfigurationError: If the endpoint definition is incomplete.
        """
        params = args[-1] if args and isinstance(args[-1], Mapping) else {}
        self.params = stringify_keys(params)
        self.url = self.params.get('url')
        try:
            if self.url:
                # A followed link carries the parameters of the call that produced it
                for key, value in decode_query(urlsplit(self.url).query).items():
                    self.params.setdefault(key, value)
            if self.descriptor.paginated:
                self.page_params = page_params(self.params)
        except ValueError as e:
            self._invalid_url(e)

        logger.debug(f"Calling {self.name} with params {self.params}")
        return self.client.backend.dispatch(self)

    def _invalid_url(self, error: ValueError):
        """Fail a call whose 'url' parameter cannot be decoded."""
        if self.client.mocked:
            try:
                self.error(ErrorKind.INVALID, details={'url': [{'description': str(error), 'error': 'InvalidValue'}]},
                           url=self.url)
            except HelpdeskError as e:
                raise e from error
        raise HelpdeskError(f"Invalid url parameter {self.url!r}: {error}") from error

    def mock(self) -> Envelope:
        """Simulate the endpoint against the mock data store. Override in subclasses."""
        raise NotImplementedError(f"{self.name} has no mock implementation")

    # Descriptor resolution

    def request_path(self) -> str:
        generator = self.descriptor.path
        if not callable(generator):
            raise ConfigurationError(f"Couldn't generate request path from {generator!r}", endpoint=self.name)
        path = generator(self)
        if not isinstance(path, str):
            raise ConfigurationError(f"Request path generator returned {path!r}, expected a string", endpoint=self.name)
        return path

    def request_body(self) -> Any:
        generator = self.descriptor.body
        if generator is None:
            return None
        if not callable(generator):
            raise ConfigurationError(f"Invalid request body generator: {generator!r}", endpoint=self.name)
        return generator(self)

    def request_params(self) -> Optional[Mapping[str, Any]]:
        if self.descriptor.params is not None:
            return self.descriptor.params(self)
        if self.descriptor.paginated:
            return self.page_params
        return None

    @property
    def method(self) -> str:
        return HTTPMethod(self.descriptor.method).value

    # Environment

    @property
    def data(self):
        """The mock data store of the client (None in real mode)."""
        return self.client.data

    def url_for(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        url = _join(self.client.url, API_PREFIX, path)
        if query:
            url = f"{url}?{encode_query(query)}"
        return url

    def html_url_for(self, path: str) -> str:
        return _join(self.client.url, path)

    def timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat(timespec='seconds')

    @staticmethod
    def pluralize(word: str) -> str:
        if re.search(r'y$', word):
            return re.sub(r'y$', 'ies', word)
        return f"{word}s"

    # Mock helpers

    def response(self, body: Any = None, status: int = 200, method: Optional[str] = None,
                 path: Optional[str] = None, url: Optional[str] = None,
                 params: Optional[Mapping[str, Any]] = None, request_body: Any = None,
                 request_headers: Optional[Dict[str, str]] = None,
                 response_headers: Optional[Dict[str, str]] = None) -> Envelope:
        """Build an envelope, raising HelpdeskError if status indicates failure."""
        if self.data is not None:
            self.data.last_request = request_body

        if url is None:
            url = self.url_for(path if path is not None else self.request_path(), query=params)

        envelope = Envelope(
            method=method or HTTPMethod.GET.value,
            url=url,
            status=status,
            body=body,
            request_body=request_body,
            request_headers=dict(request_headers or DEFAULT_REQUEST_HEADERS),
            response_headers=dict(response_headers or DEFAULT_RESPONSE_HEADERS),
        )
        logger.debug(f"{self.name} responded {status} for {envelope.method.upper()} {url}")
        return raise_for_status(envelope)

    def mock_response(self, body: Any, status: int = 200, path: Optional[str] = None,
                      headers: Optional[Dict[str, str]] = None,
                      params: Optional[Mapping[str, Any]] = None) -> Envelope:
        """Build a response for this endpoint's method, path, body and params."""
        return self.response(
            body=body,
            status=status,
            method=self.method,
            path=path or self.request_path(),
            request_body=self.request_body(),
            response_headers=headers,
            params=params if params is not None else self.request_params(),
        )

    def error(self, kind: ErrorKind, details: Any = None, url: Optional[str] = None) -> Envelope:
        """Raise the catalog error of the given kind.

        The body template is copied and 'details' merged in when given. The
        error is reported against url when given, else the request path.
        """
        spec = self.descriptor.errors.get(kind)
        if spec is None:
            raise ConfigurationError(f"No error of kind '{kind}' in the error catalog", endpoint=self.name)

        return self.response(
            body=spec.render(details),
            status=spec.status,
            method=self.method,
            path=None if url else self.request_path(),
            url=url,
        )

    @staticmethod
    def _identity(identity: Any) -> Optional[int]:
        try:
            return int(identity)
        except (TypeError, ValueError):
            return None

    def find(self, collection: str, identity: Any, error: ErrorKind = ErrorKind.NOT_FOUND,
             details: Any = None) -> Dict[str, Any]:
        """Return the record stored under identity, or raise the catalog error."""
        record = self.data[collection].get(self._identity(identity))
        if record is None:
            self.error(error, details)
        return record

    def delete(self, collection: str, identity: Any, error: ErrorKind = ErrorKind.NOT_FOUND,
               details: Any = None) -> Dict[str, Any]:
        """Remove and return the record stored under identity, or raise the catalog error."""
        record = self.data[collection].pop(self._identity(identity), None)
        if record is None:
            self.error(error, details)
        logger.debug(f"Deleted {collection}/{identity}")
        return record

    def _resolve(self, collection: Union[str, Sequence[Any]], root: Union[str, bool, None]):
        if isinstance(collection, (list, tuple)):
            return list(collection), root or None
        items = list(self.data[collection].values())
        if root is None:
            root = collection
        return items, root or None

    def resources(self, collection: Union[str, Sequence[Any]], root: Union[str, bool, None] = None) -> Envelope:
        """Respond with every record of a collection (or a literal list).

        The root key defaults to the collection name. For a literal list with
        no root, or root=False, the items key is omitted.
        """
        items, root = self._resolve(collection, root)
        body = {root: items} if root else {}
        body['count'] = len(items)
        return self.mock_response(body)

    def page(self, collection: Union[str, Sequence[Any]], root: Union[str, bool, None] = None,
             path: Optional[str] = None, params: Optional[Mapping[str, Any]] = None) -> Envelope:
        """Respond with one page of a collection (or a literal list).

        Args:
            collection: Collection name or literal list of records.
            root: Key holding the items (see resources).
            path: Path navigation links point at; defaults to the request path.
            params: Parameters echoed into navigation links; defaults to the
                    request params.
        """
        url_params = params if params is not None else self.params
        current = self.page_params if self.page_params is not None else page_params(dict(self.params))
        items, root = self._resolve(collection, root)
        path = path or self.request_path()

        try:
            result = paginate(items, current, lambda query: self.url_for(path, query), url_params)
        except ValueError as e:
            return self.error(ErrorKind.INVALID, details={'pagination': [{'description': str(e)}]})

        return self.response(
            body=result.body(root),
            method=self.method,
            path=path,
            request_body=self.request_body(),
        )
