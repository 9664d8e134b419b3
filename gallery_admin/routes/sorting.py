"""
Global sorting routes.
Admin endpoints behind the drag-and-drop gallery order screen.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from gallery_admin.database import get_db
from gallery_admin.schemas import ActionResult, GlobalOrderRequest, RandomizeRequest, SortableArtwork
from gallery_admin.services.display_order_service import DisplayOrderService
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, require_admin
from gallery_admin.utils.results import raise_for_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/sorting", tags=["Sorting"])


def get_display_order_service(
    db: AsyncSession = Depends(get_db),
    revalidator: CacheRevalidator = Depends(get_revalidator),
) -> DisplayOrderService:
    return DisplayOrderService(db, revalidator)


@router.get("/artworks", response_model=List[SortableArtwork])
async def list_sortable_artworks(
    service: DisplayOrderService = Depends(get_display_order_service),
    user: CurrentUser = Depends(require_admin),
):
    """
    Get every artwork in current gallery order.

    Ordered by global_display_order ascending, newest first on ties.
    Not paginated: the sorting screen needs the whole list.

    Raises:
        HTTPException: 500 if the query fails
    """
    try:
        artworks = await service.list_sortable()
        logger.info(f"Retrieved {len(artworks)} sortable artworks")
        return artworks
    except Exception as e:
        logger.error(f"Failed to retrieve sortable artworks: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve artworks", "detail": str(e)}
        )


@router.put("/global-order", response_model=ActionResult)
async def save_global_order(
    request: GlobalOrderRequest,
    service: DisplayOrderService = Depends(get_display_order_service),
    user: CurrentUser = Depends(require_admin),
):
    """
    Save the gallery-wide display order.

    All updates are written in one transaction; if any artwork ID is unknown
    nothing is written.

    Args:
        request: GlobalOrderRequest with (id, global_display_order) pairs

    Returns:
        ActionResult: data={"updated_count": n}

    Raises:
        HTTPException: 400 if the list is empty, 404 if an ID is unknown,
            500 if the write fails
    """
    result = await service.save_global_order(request.updates)
    logger.info(f"Global order save by {user.user_id}: success={result.success}")
    return raise_for_result(result)


@router.post("/randomize", response_model=ActionResult)
async def randomize_global_order(
    request: RandomizeRequest,
    service: DisplayOrderService = Depends(get_display_order_service),
    user: CurrentUser = Depends(require_admin),
):
    """
    Shuffle the gallery order into a random permutation of 1..N.

    The current manual order is lost, so the request must carry confirm=true.

    Raises:
        HTTPException: 400 without confirmation or when there are no artworks,
            500 if the write fails
    """
    if not request.confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Confirmation required",
                "detail": "Randomizing replaces the current order; send confirm=true to proceed"
            }
        )

    result = await service.randomize()
    logger.info(f"Global order randomized by {user.user_id}: success={result.success}")
    return raise_for_result(result)


@router.post("/populate", response_model=ActionResult)
async def populate_display_orders(
    service: DisplayOrderService = Depends(get_display_order_service),
    user: CurrentUser = Depends(require_admin),
):
    """
    Backfill artist and global orders for visible artworks from their creation dates.
    """
    result = await service.populate()
    return raise_for_result(result)
