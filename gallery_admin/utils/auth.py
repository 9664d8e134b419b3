"""
Request-scoped user context and authorization rules.

Every handler receives the caller as an explicit CurrentUser argument built
from the verified token; there is no module-level "current user".
- Admins can access/modify any data
- Artists can only access/modify their own profile and artworks
"""
from dataclasses import dataclass
from typing import Optional
import logging

from fastapi import Depends, HTTPException, status

from gallery_admin.config import settings
from gallery_admin.utils.jwt_auth import verify_gallery_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the caller for one request."""
    user_id: str
    role: str
    artist_id: Optional[int] = None
    display_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role in settings.ADMIN_ROLES


def user_from_claims(payload: dict) -> CurrentUser:
    """
    Build a CurrentUser from verified token claims.
    Missing role defaults to "artist"; artist_id is parsed as an integer when present.
    """
    raw_artist_id = payload.get("artist_id")
    try:
        artist_id = int(raw_artist_id) if raw_artist_id is not None else None
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric artist_id claim for user {payload.get('sub')}")
        artist_id = None

    return CurrentUser(
        user_id=str(payload["sub"]),
        role=payload.get("role") or "artist",
        artist_id=artist_id,
        display_name=payload.get("name") or payload.get("email"),
    )


def get_current_user(payload: dict = Depends(verify_gallery_token)) -> CurrentUser:
    """FastAPI dependency returning the authenticated caller."""
    return user_from_claims(payload)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    FastAPI dependency for admin-only endpoints.

    Raises:
        HTTPException: 403 if the caller is not an admin
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "Admin access required"}
        )
    return user


def can_access_artist(user: CurrentUser, artist_id: int) -> bool:
    if user.is_admin:
        return True
    return user.artist_id is not None and user.artist_id == artist_id


def ensure_artwork_access(user: CurrentUser, artwork_artist_id: int) -> None:
    """Raise 403 unless the caller is an admin or owns the artwork."""
    if not can_access_artist(user, artwork_artist_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "You can only access your own artworks"}
        )


def ensure_artist_access(user: CurrentUser, artist_id: int) -> None:
    """Raise 403 unless the caller is an admin or the artist themselves."""
    if not can_access_artist(user, artist_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "You can only access your own profile"}
        )
