"""Client-side access token validation for the Ilios API client.

Checks token structure and expiry only. Signatures are verified by the API.
"""

from __future__ import annotations

import json
import time
from typing import Callable

from jwt.utils import base64url_decode
from pydantic import ValidationError

from ..errors import (
    TokenDecodeError,
    TokenEmptyError,
    TokenExpiredError,
    TokenInvalidSegmentsError,
)
from ..models import TokenClaims

TOKEN_SEGMENTS = 3


class TokenValidator:
    """Validates compact JWT access tokens before they are sent to the API.

    Checks run in a fixed order so that callers get the most precise error:
    emptiness, segment count, payload decoding, then expiry.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize token validator.

        Args:
            clock: Source of the current Unix time.
        """
        self._clock = clock

    def validate(self, token: str | None) -> TokenClaims:
        """Validate access token and return its claims.

        Args:
            token: Compact JWT access token.

        Returns:
            Decoded token claims.

        Raises:
            TokenEmptyError: If the token is missing or blank.
            TokenInvalidSegmentsError: If the token does not have three segments.
            TokenDecodeError: If the payload cannot be decoded.
            TokenExpiredError: If the token is expired.
        """
        if not token or not token.strip():
            raise TokenEmptyError()

        segments = token.split(".")
        if len(segments) != TOKEN_SEGMENTS:
            raise TokenInvalidSegmentsError(segments=len(segments))

        claims = self.decode_claims(segments[1])

        if claims.is_expired(self._clock()):
            raise TokenExpiredError(expired_at=claims.exp)

        return claims

    def decode_claims(self, payload_segment: str) -> TokenClaims:
        """Decode the payload segment of a token into claims.

        Raises:
            TokenDecodeError: If the segment is not a base64url encoded JSON object.
        """
        try:
            payload = json.loads(base64url_decode(payload_segment))
        except ValueError as e:
            # binascii.Error, UnicodeDecodeError and JSONDecodeError
            raise TokenDecodeError(cause=e) from e

        if not payload or not isinstance(payload, dict):
            raise TokenDecodeError()

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenDecodeError(cause=e) from e
