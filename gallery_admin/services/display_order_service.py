"""
Display order service.
Reads the sortable artwork list and persists gallery-wide and per-artist orders.

Every write runs as one bulk UPDATE inside a single transaction: either all rows
of a request are written or none are. Failures are reported as ActionResult
values with an ErrorKind instead of being raised.
"""
import logging
import random
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.ordering import plan_populated_orders, plan_random_orders
from gallery_admin.repositories.artworks import ArtworkRepository
from gallery_admin.schemas import (
    ActionResult,
    ArtistOrderUpdate,
    ErrorKind,
    GlobalOrderUpdate,
    SortableArtwork,
)
from gallery_admin.services.revalidation import CacheRevalidator

logger = logging.getLogger(__name__)


class DisplayOrderService:
    """Display order reads and atomic writes for one database session."""

    def __init__(self, db: AsyncSession, revalidator: CacheRevalidator):
        self.db = db
        self.artworks = ArtworkRepository(db)
        self.revalidator = revalidator

    async def list_sortable(self) -> List[SortableArtwork]:
        return await self.artworks.list_sortable()

    async def save_global_order(self, updates: Sequence[GlobalOrderUpdate]) -> ActionResult:
        """
        Persist a complete or partial gallery-wide order.

        Args:
            updates: (id, global_display_order) pairs, ids unique

        Returns:
            ActionResult: data={"updated_count": n} on success; empty_input,
            not_found (nothing written) or store_error on failure
        """
        if not updates:
            return ActionResult.fail(ErrorKind.EMPTY_INPUT, "No updates provided")

        rows = [{"id": u.id, "global_display_order": u.global_display_order} for u in updates]
        return await self._write(rows, "global display order")

    async def randomize(self, rng: Optional[random.Random] = None) -> ActionResult:
        """
        Assign every artwork a unique random global order in 1..N.

        Args:
            rng: Random source, injectable for deterministic tests

        Returns:
            ActionResult: data={"updated_count": N}; empty_input when there are no artworks
        """
        try:
            artwork_ids = await self.artworks.list_ids_newest_first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load artworks for randomizing: {str(e)}", exc_info=True)
            return ActionResult.fail(ErrorKind.STORE_ERROR, "Failed to load artworks")

        if not artwork_ids:
            return ActionResult.fail(ErrorKind.EMPTY_INPUT, "No artworks found to update")

        orders = plan_random_orders(artwork_ids, rng)
        rows = [{"id": artwork_id, "global_display_order": order} for artwork_id, order in orders.items()]
        result = await self._write(rows, "randomized global display order", check_ids=False)
        if result.success:
            result.message = f"Randomized display order of {len(rows)} artworks"
        return result

    async def save_artist_order(self, artist_id: int, updates: Sequence[ArtistOrderUpdate]) -> ActionResult:
        """Persist artist_display_order for artworks owned by artist_id."""
        if not updates:
            return ActionResult.fail(ErrorKind.EMPTY_INPUT, "No updates provided")

        rows = [{"id": u.id, "artist_display_order": u.artist_display_order} for u in updates]
        return await self._write(rows, f"artist {artist_id} display order", artist_id=artist_id)

    async def populate(self) -> ActionResult:
        """
        Backfill artist and global orders for visible artworks, oldest first,
        grouped by artist. Hidden artworks keep their current values.
        """
        try:
            artworks = await self.artworks.list_oldest_first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load artworks for populating orders: {str(e)}", exc_info=True)
            return ActionResult.fail(ErrorKind.STORE_ERROR, "Failed to load artworks")

        rows = plan_populated_orders(artworks)
        if not rows:
            logger.info("No visible artworks, nothing to populate")
            return ActionResult.ok({"updated_count": 0}, "No visible artworks to order")

        result = await self._write(rows, "populated display orders", check_ids=False)
        if result.success:
            result.message = f"Populated display orders for {len(rows)} artworks"
        return result

    async def _write(
        self,
        rows: List[dict],
        label: str,
        artist_id: Optional[int] = None,
        check_ids: bool = True,
    ) -> ActionResult:
        try:
            if check_ids:
                requested = [row["id"] for row in rows]
                found = await self.artworks.existing_ids(requested, artist_id=artist_id)
                missing = sorted(set(requested) - found)
                if missing:
                    logger.warning(f"Rejected {label} update, unknown artwork IDs: {missing}")
                    return ActionResult.fail(
                        ErrorKind.NOT_FOUND,
                        f"Artwork IDs not found: {missing}",
                    )

            await self.artworks.bulk_update_orders(rows)
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write {label}: {str(e)}", exc_info=True)
            await self.db.rollback()
            return ActionResult.fail(ErrorKind.STORE_ERROR, "Failed to update display orders")

        logger.info(f"Saved {label} for {len(rows)} artworks")
        await self.revalidator.revalidate_pattern("sorting")
        return ActionResult.ok({"updated_count": len(rows)}, f"Updated {len(rows)} artworks")
