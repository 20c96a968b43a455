"""Ilios API client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import IliosClientConfig
from .core.query import (
    build_filter_string,
    collection_url,
    has_lookup_ids,
    id_filter_strings,
    is_numeric,
    page_query,
)
from .core.response import extract_collection, parse_result
from .core.token_validator import TokenValidator
from .errors import InvalidRequestError
from .models import AccessToken, RequestSpec, ResourceObject, TokenClaims
from .telemetry import get_logger, trace_operation
from .transport import HttpxTransport, Transport

AUTHORIZATION_HEADER = "X-JWT-Authorization"


class IliosClient:
    """Read-only Ilios API client with token validation and auto-pagination."""

    def __init__(
        self,
        config: IliosClientConfig,
        *,
        transport: Transport | None = None,
        access_token: AccessToken | str | None = None,
        validator: TokenValidator | None = None,
    ) -> None:
        self.config = config
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport.from_config(config)
        if isinstance(access_token, str):
            access_token = AccessToken(token=access_token)
        self._access_token = access_token
        self._validator = validator or TokenValidator()
        self._logger = get_logger()

    @classmethod
    def from_hostname(cls, hostname: str, **kwargs: Any) -> IliosClient:
        """Create client for an Ilios host with default settings."""
        return cls(IliosClientConfig(base_url=hostname), **kwargs)

    def __enter__(self) -> IliosClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    def validate_access_token(self, access_token: str | None = None) -> TokenClaims:
        """Validate the given or bound access token and return its claims."""
        with trace_operation("ilios.validate_access_token"):
            return self._validator.validate(self._resolve_token(access_token))

    def fetch_collection(
        self,
        access_token: str | None,
        object_type: str,
        filters: Mapping[str, Any] | None = None,
        sort_order: Mapping[str, Any] | None = None,
        page_size: int | None = None,
    ) -> list[ResourceObject]:
        """Fetch all objects of a type, following pages until exhausted.

        Args:
            access_token: API access token, or None to use the bound token.
            object_type: API object name, e.g. ``courses`` or ``learnerGroups``.
            filters: Filter values by field, e.g. ``{"school": 1, "id": [1, 2]}``.
            sort_order: Sort directions by field, e.g. ``{"title": "ASC"}``.
            page_size: Number of objects per request.

        Returns:
            All matching objects in API order.

        Raises:
            TokenError: If the access token fails validation.
            ResponseError: If any page is empty, malformed or an error payload.
            NetworkError: If the transport fails.
        """
        page_size = page_size if page_size is not None else self.config.page_size
        if page_size <= 0:
            raise InvalidRequestError("Page size must be a positive integer.", field="page_size")

        spec = RequestSpec.build(object_type, filters, sort_order, page_size)

        with trace_operation(
            "ilios.fetch_collection",
            attributes={"ilios.object_type": object_type, "ilios.page_size": page_size},
        ) as span:
            self._authorize(access_token)

            url = collection_url(self.config.api_base_url, spec.object_type)
            filter_string = build_filter_string(spec)
            results: list[ResourceObject] = []
            offset = 0

            while True:
                self._logger.debug(
                    "Fetching page",
                    object_type=object_type,
                    limit=page_size,
                    offset=offset,
                )
                body = self._transport.get(url + page_query(page_size, offset, filter_string))
                page = extract_collection(parse_result(body), object_type)
                if not page:
                    break

                results.extend(page)
                if len(page) < page_size:
                    break
                offset += page_size

            span.set_attribute("ilios.result_count", len(results))
            self._logger.info(
                "Fetched collection",
                object_type=object_type,
                count=len(results),
            )
            return results

    def fetch_by_id(
        self,
        access_token: str | None,
        object_type: str,
        object_id: Any,
    ) -> ResourceObject | None:
        """Fetch a single object by its id.

        Returns:
            The object, or None if the id is not numeric or nothing matched.
        """
        if not is_numeric(object_id):
            return None

        results = self.fetch_by_ids(access_token, object_type, object_id, batch_size=1)
        return results[0] if results else None

    def fetch_by_ids(
        self,
        access_token: str | None,
        object_type: str,
        ids: Any,
        batch_size: int | None = None,
    ) -> list[ResourceObject]:
        """Fetch objects by id, splitting long id lists into batches.

        Args:
            access_token: API access token, or None to use the bound token.
            object_type: API object name.
            ids: A single numeric id or a list of ids.
            batch_size: Maximum number of ids per request.

        Returns:
            The matching objects, in batch order. Empty if ``ids`` is neither
            numeric nor a non-empty list.

        Raises:
            TokenError: If the access token fails validation.
            ResponseError: If any batch response is malformed or an error payload.
            NetworkError: If the transport fails.
        """
        if not has_lookup_ids(ids):
            return []

        batch_size = batch_size if batch_size is not None else self.config.batch_size
        if batch_size <= 0:
            raise InvalidRequestError("Batch size must be a positive integer.", field="batch_size")

        filter_strings = id_filter_strings(ids, batch_size)

        with trace_operation(
            "ilios.fetch_by_ids",
            attributes={
                "ilios.object_type": object_type,
                "ilios.batch_size": batch_size,
                "ilios.batches": len(filter_strings),
            },
        ) as span:
            self._authorize(access_token)

            url = collection_url(self.config.api_base_url, object_type)
            results: list[ResourceObject] = []

            for batch, filter_string in enumerate(filter_strings):
                self._logger.debug("Fetching batch", object_type=object_type, batch=batch)
                body = self._transport.get(url + filter_string)
                results.extend(extract_collection(parse_result(body), object_type))

            span.set_attribute("ilios.result_count", len(results))
            self._logger.info(
                "Fetched objects by id",
                object_type=object_type,
                batches=len(filter_strings),
                count=len(results),
            )
            return results

    def _resolve_token(self, access_token: str | None) -> str | None:
        if access_token is not None:
            return access_token
        return self._access_token.value if self._access_token else None

    def _authorize(self, access_token: str | None) -> None:
        """Validate the token and install it as the only request header."""
        token = self._resolve_token(access_token)
        self._validator.validate(token)
        self._transport.reset_header()
        self._transport.set_header([f"{AUTHORIZATION_HEADER}: Token {token}"])
