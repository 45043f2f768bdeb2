"""
app/api/security.py

Shared API key gate for write endpoints.
"""

from __future__ import annotations

import hmac
import logging

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from app.config import ApiSettings, get_api_settings

logger = logging.getLogger(__name__)

API_KEY_HEADER_NAME = "X-API-Key"
UNAUTHORIZED_MESSAGE = "Unauthorized: Invalid or missing API Key."

api_key_header = APIKeyHeader(name=API_KEY_HEADER_NAME, auto_error=False)


def authorize(credential: str | None, expected: str | None) -> bool:
    """
    Return True when ``credential`` matches the configured key.

    Denies when either side is missing so an unset API_KEY never opens the gate.
    """

    if not credential or not expected:
        return False
    return hmac.compare_digest(credential.encode("utf-8"), expected.encode("utf-8"))


def require_api_key(
    credential: str | None = Security(api_key_header),
    settings: ApiSettings = Depends(get_api_settings),
) -> None:
    """
    FastAPI dependency that rejects requests without a valid X-API-Key.
    """

    if not authorize(credential, settings.api_key):
        logger.warning("Rejected request with %s API key", "invalid" if credential else "missing")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": UNAUTHORIZED_MESSAGE},
        )
