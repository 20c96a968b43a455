"""Pydantic models for the Ilios API client.

Frozen models for tokens, claims and request descriptions.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .config import DEFAULT_BATCH_SIZE

ResourceObject = dict[str, Any]


class AccessToken(BaseModel):
    """Access token bound to a client."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr

    @property
    def value(self) -> str:
        """Get the raw token string."""
        return self.token.get_secret_value()


class TokenClaims(BaseModel):
    """Claims decoded from an access token payload."""

    model_config = ConfigDict(frozen=True, extra="allow")

    exp: int | None = Field(default=None, description="Expiration time (Unix timestamp)")
    iat: Any = Field(default=None, description="Issued at time")

    # Ilios service-account tokens
    tid: Any = Field(default=None, description="Service token ID")

    def is_expired(self, now: float | None = None) -> bool:
        """Check if the token expired before ``now`` (whole seconds)."""
        if self.exp is None:
            return True
        current = int(now if now is not None else datetime.now(UTC).timestamp())
        return self.exp < current

    @property
    def expires_at(self) -> datetime | None:
        """Get expiration as datetime."""
        if self.exp is None:
            return None
        return datetime.fromtimestamp(self.exp, tz=UTC)

    @property
    def is_service_token(self) -> bool:
        """Whether the token was issued to a service account."""
        return self.tid is not None

    def to_dict(self) -> dict[str, Any]:
        """Get all claims, including unmodelled ones, as a mapping."""
        return self.model_dump(exclude_none=True)


class SortDirection(StrEnum):
    """Sort directions understood by the API."""

    ASC = "ASC"
    DESC = "DESC"


class ScalarFilter(BaseModel):
    """Filter matching a single value."""

    model_config = ConfigDict(frozen=True)

    value: str

    def to_query(self, key: str) -> str:
        return f"&filters[{key}]={self.value}"


class ListFilter(BaseModel):
    """Filter matching any of several values."""

    model_config = ConfigDict(frozen=True)

    values: tuple[str, ...]

    def to_query(self, key: str) -> str:
        return "".join(f"&filters[{key}][]={value}" for value in self.values)


FilterValue = ScalarFilter | ListFilter


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, StrEnum):
        return value.value
    return str(value)


def to_filter(value: Any) -> FilterValue:
    """Coerce a plain scalar or sequence into a filter variant."""
    if isinstance(value, ScalarFilter | ListFilter):
        return value
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return ListFilter(values=tuple(_stringify(v) for v in value))
    return ScalarFilter(value=_stringify(value))


class RequestSpec(BaseModel):
    """Description of one collection request."""

    model_config = ConfigDict(frozen=True)

    object_type: str = Field(..., min_length=1)
    filters: dict[str, FilterValue] = Field(default_factory=dict)
    sort_order: dict[str, str] = Field(default_factory=dict)
    page_size: Annotated[int, Field(gt=0)] = DEFAULT_BATCH_SIZE

    @field_validator("filters", mode="before")
    @classmethod
    def coerce_filters(cls, v: Any) -> dict[str, FilterValue]:
        """Accept plain scalars and lists as filter values."""
        if v is None:
            return {}
        return {str(key): to_filter(value) for key, value in v.items()}

    @field_validator("sort_order", mode="before")
    @classmethod
    def coerce_sort_order(cls, v: Any) -> dict[str, str]:
        """Accept ``SortDirection`` members and plain strings."""
        if v is None:
            return {}
        return {str(key): _stringify(value) for key, value in v.items()}

    @classmethod
    def build(
        cls,
        object_type: str,
        filters: Mapping[str, Any] | None = None,
        sort_order: Mapping[str, Any] | None = None,
        page_size: int = DEFAULT_BATCH_SIZE,
    ) -> Self:
        """Create a request spec from plain arguments."""
        return cls(
            object_type=object_type,
            filters=dict(filters or {}),
            sort_order=dict(sort_order or {}),
            page_size=page_size,
        )
