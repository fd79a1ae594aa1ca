"""
Identity — resolves the calling user for route handlers.

Sign-in happens upstream (Supabase Auth behind the storefront gateway);
requests reach this service with the authenticated user id in the
``X-User-Id`` header.
Version: 1.0.0
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException, status

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
) -> dict:
    """Return ``{"user_id": ...}`` for the caller or reject with 401."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        logger.warning("Authentication failed - missing X-User-Id header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "code": "UNAUTHORIZED",
                "message": "Missing user identity",
            },
        )
    return {"user_id": user_id}
