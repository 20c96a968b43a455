"""Core components for the Ilios API client.

Token validation, request URL building and response classification used
by ``IliosClient``.
"""

from __future__ import annotations

from .query import build_filter_string, id_filter_strings, is_numeric
from .response import extract_collection, parse_result
from .token_validator import TokenValidator

__all__ = [
    "TokenValidator",
    "build_filter_string",
    "extract_collection",
    "id_filter_strings",
    "is_numeric",
    "parse_result",
]
