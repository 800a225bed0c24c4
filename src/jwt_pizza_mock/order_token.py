"""Fixed order verification token returned by the mocked order endpoints.

The token is a JWT-shaped string with a placeholder signature. Nothing here
signs or verifies; the verify endpoint always reports the same claims.
"""
from __future__ import annotations

import base64
import copy
import json
from typing import Any, Dict

from jwt_pizza_mock.exceptions import TokenFormatError

TOKEN_HEADER: Dict[str, Any] = {"alg": "HS256", "typ": "JWT"}
TOKEN_SIGNATURE = "test-signature"
TOKEN_ISSUED_AT = 1707145000

VERIFY_CLAIMS: Dict[str, Any] = {
    "vendor": {"id": "test", "name": "Test Pizza"},
    "diner": {"id": 3, "name": "Kai Chen", "email": "d@jwt.com"},
    "order": {"id": 100, "items": [{"menuId": 1, "description": "Veggie", "price": 0.0038}]},
}


def _b64url_encode(data: Dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def encode_order_token(claims: Dict[str, Any], issued_at: int = TOKEN_ISSUED_AT) -> str:
    payload = dict(claims)
    payload["iat"] = issued_at
    return ".".join((_b64url_encode(TOKEN_HEADER), _b64url_encode(payload), TOKEN_SIGNATURE))


def decode_claims(token: str) -> Dict[str, Any]:
    """Decode the claims segment of ``token`` without checking the signature."""
    parts = token.split(".") if isinstance(token, str) else []
    if len(parts) != 3 or not all(parts):
        raise TokenFormatError(f"expected header.claims.signature, got {token!r}")
    try:
        claims = json.loads(_b64url_decode(parts[1]))
    except (ValueError, UnicodeDecodeError) as exc:
        raise TokenFormatError(f"claims segment is not base64url JSON: {exc}") from exc
    if not isinstance(claims, dict):
        raise TokenFormatError("claims segment must decode to a JSON object")
    return claims


def verify_payload() -> Dict[str, Any]:
    """Claims reported by the verify endpoint (a fresh copy per call)."""
    return copy.deepcopy(VERIFY_CLAIMS)


ORDER_JWT = encode_order_token(VERIFY_CLAIMS)
