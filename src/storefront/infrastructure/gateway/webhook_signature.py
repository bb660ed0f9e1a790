"""Webhook signature verification.

Header format: ``t=<unix ts>,v1=<hex>[,v1=<hex>...]`` where each ``v1`` is
HMAC-SHA256 over ``"<ts>.<raw body>"`` keyed with the endpoint secret.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time

from storefront.domain.exceptions import SignatureError


def compute_signature(secret: str, timestamp: int, payload: bytes) -> str:
    signed = f"{timestamp}.".encode("utf-8") + payload
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def sign_header(secret: str, payload: bytes, timestamp: int | None = None) -> str:
    ts = int(time.time()) if timestamp is None else timestamp
    return f"t={ts},v1={compute_signature(secret, ts, payload)}"


def _parse_header(header: str) -> tuple[int, list[str]]:
    timestamp: int | None = None
    signatures: list[str] = []
    for part in header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                raise SignatureError("Malformed signature timestamp") from None
        elif key == "v1" and value:
            signatures.append(value)
    if timestamp is None or not signatures:
        raise SignatureError("Unable to extract timestamp and signatures from header")
    return timestamp, signatures


def construct_event(
    payload: bytes,
    header: str | None,
    secret: str,
    tolerance: int = 300,
    now: float | None = None,
) -> dict:
    """Verify ``header`` against ``payload`` and return the decoded event."""
    if not header:
        raise SignatureError("Missing signature header")
    timestamp, signatures = _parse_header(header)

    expected = compute_signature(secret, timestamp, payload)
    if not any(hmac.compare_digest(expected, sig) for sig in signatures):
        raise SignatureError("No signatures found matching the expected signature for payload")

    current = time.time() if now is None else now
    if tolerance and abs(current - timestamp) > tolerance:
        raise SignatureError("Timestamp outside the tolerance zone")

    try:
        event = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise SignatureError("Webhook payload is not valid JSON") from None
    if not isinstance(event, dict):
        raise SignatureError("Webhook payload is not an event object")
    return event
