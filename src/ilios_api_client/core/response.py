"""Response classification for the Ilios API client."""

from __future__ import annotations

import json
from typing import Any

from ..errors import (
    ApiError,
    EmptyResponseError,
    ResponseDecodeError,
    UnexpectedResponseError,
)
from ..models import ResourceObject


def parse_result(body: str) -> dict[str, Any]:
    """Decode a response body and raise on error payloads.

    Args:
        body: Raw response body.

    Returns:
        The decoded JSON object.

    Raises:
        EmptyResponseError: If the body is empty.
        ResponseDecodeError: If the body is not a non-empty JSON object.
        ApiError: If the body is an ``errors`` or ``code``/``message`` payload.
    """
    if not body:
        raise EmptyResponseError()

    try:
        result = json.loads(body)
    except ValueError as e:
        raise ResponseDecodeError(cause=e) from e

    if not result or not isinstance(result, dict):
        raise ResponseDecodeError()

    errors = result.get("errors")
    if isinstance(errors, list) and errors:
        raise ApiError.from_errors(errors)

    if "code" in result and "message" in result:
        raise ApiError.from_code_and_message(result["code"], result["message"])

    return result


def extract_collection(result: dict[str, Any], object_type: str) -> list[ResourceObject]:
    """Get the requested collection out of a decoded response.

    The API keys collections by their camel-cased name while paths are
    lower-cased, so the name is tried as given first.

    Raises:
        UnexpectedResponseError: If the response has no such collection, or
            holds something other than a list under its key.
    """
    for key in (object_type, object_type.lower()):
        if key not in result:
            continue
        collection = result[key]
        if collection is None:
            return []
        if not isinstance(collection, list):
            raise UnexpectedResponseError(object_type)
        return collection
    raise UnexpectedResponseError(object_type)
