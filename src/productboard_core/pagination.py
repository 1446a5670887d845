"""Listing walkers for the two pagination conventions of the Productboard API.

- Link-based: each page carries ``data`` and ``links.next``.
- Cursor-based (notes): each page carries ``data`` and ``pageCursor``.

Both walkers stop as soon as the requested number of items is collected and
never request a page whose items would be discarded. Pages are fetched
sequentially; a continuation token is only valid for the page after it.
"""
import logging
from typing import Any, Mapping, Optional

from .client import ProductboardClient
from .normalizers import normalize_limit
from .schemas import CursorPage, LinkPage

logger = logging.getLogger("productboard-core.pagination")

MAX_PAGE_SIZE = 100


def page_items(payload: Any) -> list:
    """Return the page's ``data`` list, or an empty list."""
    data = payload.get("data") if isinstance(payload, dict) else None
    return data if isinstance(data, list) else []


def next_link(payload: Any) -> Optional[str]:
    """Return ``links.next`` when the payload has one."""
    if not isinstance(payload, dict):
        return None
    links = payload.get("links")
    candidate = links.get("next") if isinstance(links, dict) else None
    return candidate or None


async def walk_links(
    client: ProductboardClient,
    path: str,
    query: Optional[Mapping[str, Any]] = None,
    limit: Any = None,
    page_size_param: Optional[str] = None,
) -> LinkPage:
    """Follow ``links.next`` from ``path`` until ``limit`` items or no next link.

    If ``page_size_param`` is given and the caller did not set it, the first
    request asks for ``min(100, limit)`` items. Later requests use the next
    link exactly as returned. An empty page that hands back the link it was
    fetched from ends the walk.
    """
    max_items = normalize_limit(limit)
    items: list = []
    next_url: Optional[str] = None

    first_query = dict(query or {})
    if page_size_param and first_query.get(page_size_param) is None:
        first_query[page_size_param] = min(MAX_PAGE_SIZE, max_items)

    pages = 0
    while len(items) < max_items:
        if next_url:
            payload = await client.request("GET", absolute_url=next_url)
        else:
            payload = await client.request("GET", path, query=first_query)
        pages += 1

        remaining = max_items - len(items)
        page = page_items(payload)
        items.extend(page[:remaining])

        candidate = next_link(payload)
        logger.debug(f"{path}: page {pages} -> {len(items)}/{max_items} items, next={bool(candidate)}")
        if not page and candidate and candidate == next_url:
            logger.warning(f"{path}: empty page repeated its next link, stopping after {pages} pages")
            candidate = None
        if not candidate or len(items) >= max_items:
            return LinkPage(
                items=items,
                count=len(items),
                has_more=bool(candidate) and len(items) >= max_items,
                next=candidate,
            )

        next_url = candidate

    return LinkPage(items=items, count=len(items), has_more=False, next=None)


async def walk_cursor(
    client: ProductboardClient,
    path: str,
    query: Optional[Mapping[str, Any]] = None,
    limit: Any = None,
) -> CursorPage:
    """Page through a cursor-based listing, forwarding ``pageCursor`` each time.

    Each request asks for ``min(100, remaining)`` items via ``pageLimit``.
    An empty page that returns the cursor it was fetched with ends the walk.
    """
    max_items = normalize_limit(limit)
    items: list = []
    base_query = dict(query or {})
    cursor = base_query.pop("pageCursor", None) or None

    pages = 0
    while len(items) < max_items:
        remaining = max_items - len(items)
        page_query = {**base_query, "pageLimit": min(MAX_PAGE_SIZE, remaining)}
        if cursor:
            page_query["pageCursor"] = cursor

        payload = await client.request("GET", path, query=page_query)
        pages += 1

        page = page_items(payload)
        items.extend(page[:remaining])

        previous = cursor
        cursor = payload.get("pageCursor") if isinstance(payload, dict) else None
        cursor = cursor or None
        logger.debug(f"{path}: page {pages} -> {len(items)}/{max_items} items, cursor={bool(cursor)}")
        if not page and cursor and cursor == previous:
            logger.warning(f"{path}: empty page repeated its cursor, stopping after {pages} pages")
            cursor = None
        if not cursor or len(items) >= max_items:
            return CursorPage(
                items=items,
                count=len(items),
                has_more=bool(cursor) and len(items) >= max_items,
                next_cursor=cursor,
            )

    return CursorPage(items=items, count=len(items), has_more=False, next_cursor=None)
