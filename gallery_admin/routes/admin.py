"""
Admin dashboard routes.
Headline statistics and spreadsheet exports.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal
import logging

from gallery_admin.database import get_db
from gallery_admin.repositories.artists import ArtistRepository
from gallery_admin.repositories.artworks import ArtworkRepository
from gallery_admin.repositories.events import EventRepository
from gallery_admin.schemas import AdminStats, ExportType
from gallery_admin.services.export_service import XLSX_CONTENT_TYPE, export_table
from gallery_admin.utils.auth import CurrentUser, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", response_model=AdminStats)
async def get_admin_stats(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """
    Dashboard totals.

    Returns:
        AdminStats: artwork count, summed price of visible artworks (as a
            decimal string), artist count and number of active events
    """
    try:
        artworks = ArtworkRepository(db)
        return AdminStats(
            total_artworks=await artworks.count(),
            artworks_worth=f"{await artworks.visible_worth():.2f}",
            total_artists=await ArtistRepository(db).count(),
            active_events=await EventRepository(db).count_active(),
        )
    except Exception as e:
        logger.error(f"Failed to compute admin stats: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to load dashboard statistics", "detail": str(e)}
        )


@router.get("/export")
async def export_data(
    type: ExportType,
    format: Literal["excel"] = "excel",
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """
    Download one table as an Excel workbook.

    Args:
        type: Table to export (events, artworks, artists, inquiries, event-registrations)
        format: Only "excel" is supported

    Returns:
        Response: .xlsx attachment named after the table
    """
    try:
        content = await export_table(db, type)
    except Exception as e:
        logger.error(f"Export of {type} failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Export failed", "detail": str(e)}
        )

    logger.info(f"User {user.user_id} exported {type} ({len(content):,} bytes)")
    return Response(
        content=content,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{type}.xlsx"'},
    )
