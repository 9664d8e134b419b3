"""
Rate limiting utilities for API endpoints.
Uses slowapi to throttle public form submissions and uploads.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from gallery_admin.config import settings


def get_client_identifier(request: Request) -> str:
    """
    Get client identifier for rate limiting.
    Uses forwarded IP if behind proxy, otherwise remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP in chain is the original client
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=["300/hour"],
    storage_uri="memory://",  # In-memory storage (use Redis when running several workers)
    enabled=settings.RATE_LIMIT_ENABLED,
)


RATE_LIMITS = {
    "public_form": "10/minute",  # Inquiries and event registrations
    "invitation": "20/minute",  # Invitation code checks
    "upload": "30/hour",
}
