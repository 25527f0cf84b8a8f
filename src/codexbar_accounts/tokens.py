"""Best-effort decoding of compact JSON Web Tokens.

Only the payload segment is read. Signatures and expiry are never checked:
the claims are used for display metadata, not for authentication.
"""

import binascii
from typing import Any

import orjson
from jwt.utils import base64url_decode
from pydantic import ValidationError

from codexbar_accounts.exceptions import TokenDecodeError
from codexbar_accounts.models import IdTokenClaims


def decode_jwt_payload(token: str) -> dict[str, Any]:
    """Decode the payload segment of a compact token.

    Args:
        token: Token in `header.payload.signature` form. Missing base64
            padding on the payload is tolerated.

    Returns:
        The payload as a JSON object

    Raises:
        TokenDecodeError: If the token has fewer than two segments, or the
            payload is not base64url encoded JSON object
    """
    segments = token.split(".")
    if len(segments) < 2:
        raise TokenDecodeError(
            "Token has no payload segment", details={"segments": len(segments)}
        )

    try:
        raw = base64url_decode(segments[1])
    except (binascii.Error, ValueError) as e:
        raise TokenDecodeError(f"Invalid base64 in token payload: {e}") from e

    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise TokenDecodeError(f"Invalid JSON in token payload: {e}") from e

    if not isinstance(payload, dict):
        raise TokenDecodeError(
            "Token payload is not a JSON object",
            details={"type": type(payload).__name__},
        )
    return payload


def decode_id_token_claims(token: str) -> IdTokenClaims:
    """Decode a token payload into typed ID token claims.

    Raises:
        TokenDecodeError: If the payload cannot be decoded
    """
    payload = decode_jwt_payload(token)
    try:
        return IdTokenClaims.model_validate(payload)
    except ValidationError as e:
        raise TokenDecodeError(f"Unexpected token claims: {e}") from e
