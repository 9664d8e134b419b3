"""
Artist routes.
Profiles, public visibility settings and per-artist artwork ordering.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from gallery_admin.database import get_db
from gallery_admin.models import Artist
from gallery_admin.repositories.artists import ArtistRepository
from gallery_admin.repositories.artworks import ArtworkRepository
from gallery_admin.schemas import (
    ActionResult,
    ArtistListItem,
    ArtistOrderRequest,
    ArtistPortfolioResponse,
    ArtistProfileUpdate,
    ArtistResponse,
    ArtistSettingsUpdate,
    ArtworkResponse,
)
from gallery_admin.services.display_order_service import DisplayOrderService
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, ensure_artist_access, get_current_user, require_admin
from gallery_admin.utils.results import raise_for_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/artists", tags=["Artists"])


async def _get_artist_or_404(repo: ArtistRepository, artist_id: int) -> Artist:
    artist = await repo.get(artist_id)
    if not artist:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Artist not found", "detail": f"Artist ID {artist_id} does not exist"}
        )
    return artist


@router.get("", response_model=List[ArtistListItem])
async def list_artists(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """List all artists, newest first, with the number of artworks each owns."""
    try:
        rows = await ArtistRepository(db).list_with_artwork_counts()
        logger.info(f"Retrieved {len(rows)} artists")
        return [
            ArtistListItem(**ArtistResponse.model_validate(artist).model_dump(), artwork_count=count)
            for artist, count in rows
        ]
    except Exception as e:
        logger.error(f"Failed to retrieve artists: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve artists", "detail": str(e)}
        )


@router.get("/{artist_id}", response_model=ArtistPortfolioResponse)
async def get_artist_portfolio(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Get an artist's profile and artworks in portfolio order.

    Raises:
        HTTPException: 403 unless admin or the artist, 404 if the artist does not exist
    """
    ensure_artist_access(user, artist_id)
    artist = await _get_artist_or_404(ArtistRepository(db), artist_id)
    artworks = await ArtworkRepository(db).list_for_artist(artist_id)
    return ArtistPortfolioResponse(
        artist=ArtistResponse.model_validate(artist),
        artworks=[ArtworkResponse.model_validate(a) for a in artworks],
    )


@router.put("/{artist_id}/profile", response_model=ArtistResponse)
async def update_artist_profile(
    artist_id: int,
    command: ArtistProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Update an artist's profile.

    Exhibitions are sent as free text, one per line. The slug is generated from
    the name when not supplied. Only admins may change pre_approved.

    Raises:
        HTTPException: 403 unless admin or the artist, 404 if the artist does not exist
    """
    ensure_artist_access(user, artist_id)
    if command.pre_approved is not None and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "Only admins can change pre-approval"}
        )

    repo = ArtistRepository(db)
    artist = await _get_artist_or_404(repo, artist_id)

    try:
        artist = await repo.update_profile(artist, command)
        await db.commit()
    except Exception as e:
        logger.error(f"Error updating artist {artist_id} profile: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update artist profile", "detail": str(e)}
        )

    logger.info(f"Updated profile of artist {artist_id}")
    await revalidator.revalidate_pattern("artists")
    return ArtistResponse.model_validate(artist)


@router.put("/{artist_id}/settings", response_model=ArtistResponse)
async def update_artist_settings(
    artist_id: int,
    command: ArtistSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    ensure_artist_access(user, artist_id)
    repo = ArtistRepository(db)
    artist = await _get_artist_or_404(repo, artist_id)

    try:
        artist = await repo.update_settings(artist, command)
        await db.commit()
    except Exception as e:
        logger.error(f"Error updating artist {artist_id} settings: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update artist settings", "detail": str(e)}
        )

    await revalidator.revalidate_pattern("artists")
    return ArtistResponse.model_validate(artist)


@router.post("/{artist_id}/toggle-visibility", response_model=ArtistResponse)
async def toggle_artist_visibility(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    repo = ArtistRepository(db)
    artist = await _get_artist_or_404(repo, artist_id)
    artist.is_visible = not artist.is_visible
    await db.commit()
    await db.refresh(artist)

    logger.info(f"Artist {artist_id} visibility set to {artist.is_visible}")
    await revalidator.revalidate_pattern("artists")
    return ArtistResponse.model_validate(artist)


@router.delete("/{artist_id}")
async def delete_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Delete an artist (admin only).

    Raises:
        HTTPException: 400 while the artist still owns artworks, 404 if the artist does not exist
    """
    repo = ArtistRepository(db)
    artist = await _get_artist_or_404(repo, artist_id)

    artwork_count = await ArtworkRepository(db).count(artist_id)
    if artwork_count:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Artist has artworks",
                "detail": f"Delete or reassign the artist's {artwork_count} artworks first"
            }
        )

    try:
        await repo.delete(artist)
        await db.commit()
    except Exception as e:
        logger.error(f"Error deleting artist {artist_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete artist", "detail": str(e)}
        )

    logger.info(f"Deleted artist {artist_id}")
    await revalidator.revalidate_pattern("artists")
    return {"message": "Artist deleted successfully", "id": artist_id}


@router.put("/{artist_id}/artwork-order", response_model=ActionResult)
async def save_artist_artwork_order(
    artist_id: int,
    request: ArtistOrderRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Save the order of artworks inside one artist's portfolio.

    Every ID must belong to the artist; otherwise nothing is written.

    Raises:
        HTTPException: 400 if empty, 403 unless admin or the artist,
            404 if an ID is unknown or owned by another artist
    """
    ensure_artist_access(user, artist_id)
    result = await DisplayOrderService(db, revalidator).save_artist_order(artist_id, request.updates)
    return raise_for_result(result)
