"""
Page arithmetic for mock list endpoints.

Mirrors the service's page/per_page scheme, including its page count: the
service reports count // per_page + 1 pages, which is one page too many when
count is an exact multiple of per_page. Mock responses reproduce that so
clients walking next_page links see the same trailing empty page.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

DEFAULT_PER_PAGE = 50
DEFAULT_PAGE = 1


@dataclass(frozen=True)
class Page:
    """One computed page of a resource set."""
    items: List[Any]
    count: int
    page: int
    per_page: int
    total_pages: int
    next_page: Optional[str] = None
    previous_page: Optional[str] = None

    def body(self, root: Optional[str]) -> dict:
        """Render the list body; root is omitted when falsy."""
        body = {}
        if root:
            body[root] = self.items
        body.update({
            'count': self.count,
            'next_page': self.next_page,
            'previous_page': self.previous_page,
        })
        return body


def coerce_page_number(value: Any, default: int, name: str) -> int:
    """Coerce a page/per_page value to a positive int.

    Raises:
        ValueError: If the value is not an integer or is below 1.
    """
    if value is None or value == '':
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if number < 1:
        raise ValueError(f"{name} must be at least 1, got {number}")
    return number


def total_pages(count: int, per_page: int) -> int:
    """Number of pages the service reports for count records."""
    return count // per_page + 1


def paginate(resources: Sequence[Any], page_params: Mapping[str, Any],
             url_for: Callable[[Mapping[str, Any]], str],
             url_params: Optional[Mapping[str, Any]] = None) -> Page:
    """Slice resources according to page_params and build navigation links.

    Args:
        resources: The full, ordered resource set.
        page_params: Normalized pagination parameters (page, per_page, ...).
        url_for: Builds a navigation URL from a query mapping.
        url_params: Extra caller parameters echoed into navigation URLs;
                    page and per_page are always set by this function.

    Raises:
        ValueError: If page or per_page is not a positive integer.
    """
    per_page = coerce_page_number(page_params.get('per_page'), DEFAULT_PER_PAGE, 'per_page')
    page = coerce_page_number(page_params.get('page'), DEFAULT_PAGE, 'page')

    items = list(resources)
    count = len(items)
    pages = total_pages(count, per_page)
    offset = (page - 1) * per_page

    def link(target: int) -> str:
        query = dict(url_params or {})
        query.update({'page': target, 'per_page': per_page})
        return url_for(query)

    return Page(
        items=items[offset:offset + per_page],
        count=count,
        page=page,
        per_page=per_page,
        total_pages=pages,
        next_page=link(page + 1) if page < pages else None,
        previous_page=link(page - 1) if page > 1 else None,
    )
