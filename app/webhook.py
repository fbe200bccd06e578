"""GitHub webhook signature verification."""

import hashlib
import hmac
import json
import logging
from typing import Any

from fastapi import HTTPException, Request

from app.config import Settings
from shared.constants import SIGNATURE_HEADER, SIGNATURE_MISMATCH_TEXT, SIGNATURE_PREFIX

logger = logging.getLogger(__name__)


def compute_signature(payload: bytes, secret: str) -> str:
    """Compute the ``sha256=<hex>`` signature GitHub sends for a body."""
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(payload: bytes, signature: str | None, secret: str) -> bool:
    """Verify GitHub webhook signature.

    Args:
        payload: Raw request body, exactly as received
        signature: X-Hub-Signature-256 header value
        secret: Shared webhook secret

    Returns:
        True if the signature matches the body
    """
    if not signature:
        return False

    # Constant-time comparison over bytes
    expected = compute_signature(payload, secret).encode("ascii")
    return hmac.compare_digest(expected, signature.encode("utf-8", "surrogateescape"))


async def get_verified_payload(request: Request, settings: Settings) -> dict[str, Any]:
    """Get and verify webhook payload.

    Args:
        request: FastAPI request object
        settings: Application settings holding the webhook secret

    Returns:
        Parsed JSON payload, empty when the body is not a JSON object

    Raises:
        HTTPException: 403 if the signature is missing or invalid, 400 if the
            signed body is not valid JSON
    """
    body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    if not verify_signature(body, signature, settings.github_webhook_secret):
        logger.warning("Signature mismatch!")
        raise HTTPException(status_code=403, detail=SIGNATURE_MISMATCH_TEXT)

    try:
        payload = json.loads(body)
    except ValueError:
        logger.error("Webhook body is not valid JSON")
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    # Other JSON values carry no project item; the filter skips them
    if not isinstance(payload, dict):
        logger.warning("Webhook body is not a JSON object")
        return {}

    return payload
