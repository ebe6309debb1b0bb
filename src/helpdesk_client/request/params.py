"""
Parameter normalization and the nested query string codec.

Callers hand requests loosely-typed mappings. Before anything else happens the
keys are turned into strings, and for paginated endpoints the pagination
subset is extracted, either from the explicit fields or from the query string
of a 'url' field (a next_page/previous_page link followed by the caller).
"""
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus, unquote_plus, urlsplit

PAGE_PARAM_KEYS = ('per_page', 'page', 'query', 'include')

_NESTED_KEY = re.compile(r'^([^\[\]]+)((?:\[[^\[\]]*\])*)$')
_SUBKEY = re.compile(r'\[([^\[\]]*)\]')


def stringify_keys(params: Optional[Mapping]) -> Dict[str, Any]:
    """Return a copy of params with string keys, recursing into nested mappings.

    Values other than mappings are left untouched.
    """
    if params is None:
        return {}
    return {
        str(key): stringify_keys(value) if isinstance(value, Mapping) else value
        for key, value in params.items()
    }


def slice_params(params: Mapping[str, Any], keys=PAGE_PARAM_KEYS) -> Dict[str, Any]:
    """Keep only the allow-listed keys, in allow-list order."""
    return {key: params[key] for key in keys if key in params}


def page_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the pagination parameters from normalized params.

    A 'url' entry is removed from params and its query string decoded;
    otherwise params themselves are filtered. Only per_page, page, query and
    include survive.
    """
    url = params.pop('url', None)
    if url:
        source = decode_query(urlsplit(url).query)
    else:
        source = params
    return slice_params(source)


def _scalar(value: Any) -> Optional[str]:
    if value is None:
        return None
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, Optional[str]]]) -> None:
    if isinstance(value, Mapping):
        for key in sorted(value, key=str):
            _flatten(f"{prefix}[{key}]" if prefix else str(key), value[key], pairs)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _flatten(f"{prefix}[]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Encode a (possibly nested) mapping as a query string.

    Nested mappings become ``parent[child]=value`` and sequences become
    ``key[]=value`` repeated. Keys are emitted in sorted order.
    """
    if not params:
        return ''
    pairs: List[Tuple[str, Optional[str]]] = []
    _flatten('', params, pairs)
    encoded = []
    for key, value in pairs:
        if value is None:
            encoded.append(quote_plus(key, safe=''))
        else:
            encoded.append(f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}")
    return '&'.join(encoded)


def decode_query(query: Optional[str]) -> Dict[str, Any]:
    """Decode a query string produced by encode_query back into a mapping.

    All leaf values decode as strings (None for a bare key).
    """
    result: Dict[str, Any] = {}
    if not query:
        return result

    for chunk in query.split('&'):
        if not chunk:
            continue
        raw_key, separator, raw_value = chunk.partition('=')
        key = unquote_plus(raw_key)
        value = unquote_plus(raw_value) if separator else None
        _assign(result, key, value)
    return result


def _assign(result: Dict[str, Any], key: str, value: Optional[str]) -> None:
    match = _NESTED_KEY.match(key)
    if not match:
        result[key] = value
        return

    path = [match.group(1)] + _SUBKEY.findall(match.group(2))
    is_list = len(path) > 1 and path[-1] == ''
    if is_list:
        path = path[:-1]
    if '' in path:
        raise ValueError(f"Unsupported nested query key: {key!r}")

    container = result
    for part in path[:-1]:
        child = container.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Conflicting query key: {key!r}")
        container = child

    leaf = path[-1]
    if is_list:
        items = container.setdefault(leaf, [])
        if not isinstance(items, list):
            raise ValueError(f"Conflicting query key: {key!r}")
        items.append(value)
    else:
        container[leaf] = value
