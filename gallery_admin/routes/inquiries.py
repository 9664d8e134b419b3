"""
Inquiry routes.
The public artwork page posts inquiries; admins list, count and delete them.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from gallery_admin.database import get_db
from gallery_admin.repositories.artworks import ArtworkRepository
from gallery_admin.repositories.inquiries import InquiryRepository
from gallery_admin.schemas import InquiryCreate, InquiryResponse, InquiryStats
from gallery_admin.utils.auth import CurrentUser, require_admin
from gallery_admin.utils.dates import count_since
from gallery_admin.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


@router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["public_form"])
async def create_inquiry(
    request: Request,
    inquiry_data: InquiryCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Submit an inquiry about an artwork (public).

    Raises:
        HTTPException: 404 if the artwork does not exist, 500 if the insert fails
    """
    artwork = await ArtworkRepository(db).get(inquiry_data.artwork_id)
    if not artwork:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Artwork not found", "detail": f"Artwork ID {inquiry_data.artwork_id} does not exist"}
        )

    try:
        inquiry = await InquiryRepository(db).create(inquiry_data)
        await db.commit()
    except Exception as e:
        logger.error(f"Error creating inquiry: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to submit inquiry", "detail": str(e)}
        )

    logger.info(f"New inquiry {inquiry.id} for artwork {artwork.id}")
    return InquiryResponse(
        id=inquiry.id,
        artwork_id=inquiry.artwork_id,
        artwork_title=artwork.title,
        name=inquiry.name,
        email=inquiry.email,
        phone=inquiry.phone,
        message=inquiry.message,
        created_at=inquiry.created_at,
    )


@router.get("", response_model=List[InquiryResponse])
async def list_inquiries(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """List all inquiries, newest first, with the title of the artwork they concern."""
    rows = await InquiryRepository(db).list_with_artwork_title()
    return [
        InquiryResponse(
            id=inquiry.id,
            artwork_id=inquiry.artwork_id,
            artwork_title=title,
            name=inquiry.name,
            email=inquiry.email,
            phone=inquiry.phone,
            message=inquiry.message,
            created_at=inquiry.created_at,
        )
        for inquiry, title in rows
    ]


@router.get("/stats", response_model=InquiryStats)
async def get_inquiry_stats(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """Total inquiries and those received in the last 7 and 30 days."""
    rows = await InquiryRepository(db).list_with_artwork_title()
    timestamps = [inquiry.created_at for inquiry, _ in rows]
    return InquiryStats(
        total=len(rows),
        this_week=count_since(timestamps, 7),
        this_month=count_since(timestamps, 30),
    )


@router.delete("/{inquiry_id}")
async def delete_inquiry(
    inquiry_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    repo = InquiryRepository(db)
    inquiry = await repo.get(inquiry_id)
    if not inquiry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Inquiry not found", "detail": f"Inquiry ID {inquiry_id} does not exist"}
        )

    await repo.delete(inquiry)
    await db.commit()
    logger.info(f"Deleted inquiry {inquiry_id}")
    return {"message": "Inquiry deleted successfully", "id": inquiry_id}
