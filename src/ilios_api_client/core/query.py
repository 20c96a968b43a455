"""Request URL building for the Ilios API client.

Query strings are emitted literally (brackets are not percent-encoded),
in the form the API documents.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Any

from ..models import RequestSpec

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_numeric(value: Any) -> bool:
    """Check if value is a number or a numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    if isinstance(value, str):
        return _NUMERIC.match(value) is not None
    return False


def collection_url(api_base_url: str, object_type: str) -> str:
    """Build the URL of an object type's collection route."""
    return f"{api_base_url}/{object_type.lower()}"


def build_filter_string(spec: RequestSpec) -> str:
    """Build the filter and sort suffix of a collection request.

    Filters come first, then sort keys, each in mapping order.
    """
    parts = [value.to_query(key) for key, value in spec.filters.items()]
    parts.extend(
        f"&order_by[{key}]={direction}" for key, direction in spec.sort_order.items()
    )
    return "".join(parts)


def page_query(limit: int, offset: int, filter_string: str) -> str:
    """Build the query string for one page of a collection."""
    return f"?limit={limit}&offset={offset}{filter_string}"


def partition(ids: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """Split ids into consecutive slices of at most ``size`` elements."""
    for start in range(0, len(ids), size):
        yield ids[start : start + size]


def has_lookup_ids(ids: Any) -> bool:
    """Check if ids is a single numeric id or a non-empty list of ids."""
    return is_numeric(ids) or (isinstance(ids, list | tuple) and len(ids) > 0)


def id_filter_strings(ids: Any, batch_size: int) -> list[str]:
    """Build one query string per id lookup request.

    A single numeric id becomes one unbounded ``filters[id]`` request; a
    non-empty list is split into batches. Anything else yields no requests.
    """
    if not has_lookup_ids(ids):
        return []

    if is_numeric(ids):
        return [f"?filters[id]={ids}"]

    return [
        f"?limit={batch_size}"
        + "".join(f"&filters[id][]={id_}" for id_ in batch)
        for batch in partition(ids, batch_size)
    ]
