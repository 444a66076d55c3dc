"""
Cursor pagination shared by every repository backend.

Backends ask the store for one row more than the page size (see
``fetch_size``). The extra row, when present, is the only signal that another
page exists, so no second round trip is needed to answer "is there more?".
"""
from __future__ import annotations

from bisect import bisect_right
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def fetch_size(limit: int) -> Optional[int]:
    """Number of rows to request from the store, or None for no cap."""
    if limit <= 0:
        return None
    return limit + 1


def paginate(rows: Iterable[T], limit: int, key: Callable[[T], str]) -> Tuple[List[T], str]:
    """
    Cut a page out of ``rows`` (already ordered by key and capped at
    ``fetch_size(limit)``) and return it with its ``last_evaluated_key``.

    The key is the one of the last row in the page when more rows remain and
    ``""`` when the page reaches the end of the collection.
    """
    page: List[T] = []
    for row in rows:
        if limit > 0 and len(page) >= limit:
            return page, key(page[-1])
        page.append(row)
    return page, ""


def key_range(sorted_keys: Sequence[str], exclusive_start_key: str, limit: int) -> Sequence[str]:
    """Keys strictly greater than the cursor (all keys for ``""``), capped at ``fetch_size``."""
    start = bisect_right(sorted_keys, exclusive_start_key) if exclusive_start_key else 0
    size = fetch_size(limit)
    if size is None:
        return sorted_keys[start:]
    return sorted_keys[start:start + size]
