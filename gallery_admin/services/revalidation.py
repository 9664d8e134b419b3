"""
Cache revalidation for pages rendered from gallery data.

After a mutation the main site's revalidation endpoint is asked to drop cached
renderings of the affected paths and tags. Revalidation is best effort: a
failure is logged and never fails the mutation that triggered it.
"""
import logging
from typing import Dict, Iterable, List, Optional

import httpx

from gallery_admin.config import settings

logger = logging.getLogger(__name__)


# Named invalidation sets: paths and cache tags per kind of change
REVALIDATION_PATTERNS: Dict[str, Dict[str, List[str]]] = {
    "artwork": {
        "paths": ["/", "/artwork", "/artists", "/admin", "/admin/artworks"],
        "tags": ["artwork", "artists"],
    },
    "sorting": {
        "paths": ["/", "/admin", "/admin/artworks", "/admin/sorting"],
        "tags": ["artwork"],
    },
    "artists": {
        "paths": ["/artists", "/", "/admin", "/admin/artists"],
        "tags": ["artists"],
    },
    "events": {
        "paths": ["/events", "/", "/admin", "/admin/events"],
        "tags": ["events"],
    },
    "all": {
        "paths": ["/"],
        "tags": ["artwork", "artists", "events"],
    },
}


class CacheRevalidator:
    """
    Client for the main site's revalidation API.

    POSTs {secret, paths, tags} to {base_url}/api/revalidate. When no secret is
    configured, requests are skipped and only logged.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.MAIN_SITE_URL).rstrip("/")
        self.secret = secret if secret is not None else settings.REVALIDATE_SECRET
        self.timeout = timeout or settings.REVALIDATE_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/revalidate"

    async def revalidate(self, paths: Iterable[str] = (), tags: Iterable[str] = ()) -> bool:
        """
        Ask the main site to revalidate paths and tags.

        Returns:
            bool: True if the main site confirmed revalidation, False otherwise
        """
        paths, tags = list(paths), list(tags)

        if not self.secret:
            logger.info(f"REVALIDATE_SECRET not configured, skipping revalidation of {paths} {tags}")
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json={"secret": self.secret, "paths": paths, "tags": tags},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Main site revalidation failed with status {e.response.status_code}: {e.response.text}"
            )
            return False
        except httpx.HTTPError as e:
            logger.error(f"Main site revalidation request failed: {str(e)}")
            return False

        logger.info(f"Main site revalidation successful for paths={paths} tags={tags}")
        return True

    async def revalidate_pattern(self, name: str) -> bool:
        """Revalidate one of the named REVALIDATION_PATTERNS."""
        pattern = REVALIDATION_PATTERNS[name]
        return await self.revalidate(paths=pattern["paths"], tags=pattern["tags"])


def get_revalidator() -> CacheRevalidator:
    """FastAPI dependency providing the configured revalidator."""
    return CacheRevalidator()
