"""
Route dependencies — per-request access to the caller's session.
Version: 1.0.0
"""
from fastapi import Depends

from autoparts_hub.container import get_session_registry
from autoparts_hub.core.auth import get_current_user
from autoparts_hub.services.session_service import SessionRegistry, StorefrontSession


def get_user_session(
    current_user: dict = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
) -> StorefrontSession:
    return registry.get(current_user["user_id"])
