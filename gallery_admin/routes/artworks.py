"""
Artwork routes.
Admins manage every artwork; artists manage only their own.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from gallery_admin.database import get_db
from gallery_admin.models import Artwork
from gallery_admin.repositories.artists import ArtistRepository
from gallery_admin.repositories.artworks import ArtworkRepository
from gallery_admin.schemas import (
    ApprovalUpdate,
    ArtworkCreate,
    ArtworkListItem,
    ArtworkResponse,
    ArtworkStateUpdate,
    ArtworkUpdate,
    FeaturedUpdate,
    LocationUpdate,
)
from gallery_admin.services.cloudinary_service import delete_image, extract_public_id
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, ensure_artwork_access, get_current_user, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/artworks", tags=["Artworks"])


async def _get_artwork_or_404(repo: ArtworkRepository, artwork_id: int) -> Artwork:
    artwork = await repo.get(artwork_id)
    if not artwork:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Artwork not found", "detail": f"Artwork ID {artwork_id} does not exist"}
        )
    return artwork


def _list_item(artwork: Artwork, artist_name: Optional[str]) -> ArtworkListItem:
    return ArtworkListItem(
        id=artwork.id,
        title=artwork.title,
        slug=artwork.slug,
        artist_id=artwork.artist_id,
        artist_name=artist_name,
        year=artwork.year,
        medium=artwork.medium,
        price=artwork.price,
        status=artwork.status,
        location=artwork.location,
        watermarked_image=artwork.watermarked_image,
        is_visible=artwork.is_visible,
        featured=artwork.featured,
        approval_status=artwork.approval_status,
        created_at=artwork.created_at,
    )


@router.get("", response_model=List[ArtworkListItem])
async def list_artworks(
    artist_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    List artworks, newest first.

    Admins see all artworks (optionally filtered by artist_id); artists always
    see only their own.

    Raises:
        HTTPException: 403 if an artist account has no linked artist profile
    """
    if not user.is_admin:
        if user.artist_id is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "Forbidden", "message": "No artist profile linked to this account"}
            )
        artist_id = user.artist_id

    try:
        rows = await ArtworkRepository(db).list_with_artist_name(artist_id)
        logger.info(f"Retrieved {len(rows)} artworks (artist filter: {artist_id})")
        return [_list_item(artwork, name) for artwork, name in rows]
    except Exception as e:
        logger.error(f"Failed to retrieve artworks: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve artworks", "detail": str(e)}
        )


@router.get("/{artwork_id}", response_model=ArtworkResponse)
async def get_artwork(
    artwork_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    artwork = await _get_artwork_or_404(ArtworkRepository(db), artwork_id)
    ensure_artwork_access(user, artwork.artist_id)
    return ArtworkResponse.model_validate(artwork)


@router.post("", response_model=ArtworkResponse, status_code=status.HTTP_201_CREATED)
async def create_artwork(
    artwork_data: ArtworkCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Create an artwork for an artist.

    The slug is derived from the title (suffixed when taken). Artworks created by
    an admin, or by a pre-approved artist, are approved immediately; everything
    else waits in the pending queue.

    Args:
        artwork_data: Validated artwork fields

    Returns:
        ArtworkResponse: The created artwork

    Raises:
        HTTPException: 403 if not admin or owner or if an artist sets featured,
            404 if the artist does not exist, 500 if the insert fails
    """
    ensure_artwork_access(user, artwork_data.artist_id)
    if artwork_data.featured and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "Only admins can feature artworks"}
        )

    try:
        artist = await ArtistRepository(db).get(artwork_data.artist_id)
        if not artist:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Artist not found", "detail": f"Artist ID {artwork_data.artist_id} does not exist"}
            )

        approval_status = "approved" if user.is_admin or artist.pre_approved else "pending"
        artwork = await ArtworkRepository(db).create(artwork_data, approval_status=approval_status)
        await db.commit()

        logger.info(f"Created artwork {artwork.id} '{artwork.title}' ({approval_status}) for artist {artist.id}")
        await revalidator.revalidate_pattern("artwork")
        return ArtworkResponse.model_validate(artwork)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating artwork: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create artwork", "detail": str(e)}
        )


@router.put("/{artwork_id}", response_model=ArtworkResponse)
async def update_artwork(
    artwork_id: int,
    command: ArtworkUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Apply an update command to an artwork. Only fields present in the body are written.
    Only admins may change the featured flag.

    Raises:
        HTTPException: 400 if no fields are set, 403 if not admin or owner or if an
            artist sets featured, 404 if the artwork does not exist, 500 if the update fails
    """
    if not command.model_fields_set:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No valid fields to update", "detail": "Request body sets no artwork fields"}
        )

    repo = ArtworkRepository(db)
    artwork = await _get_artwork_or_404(repo, artwork_id)
    ensure_artwork_access(user, artwork.artist_id)
    if "featured" in command.model_fields_set and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "Only admins can feature artworks"}
        )

    try:
        artwork = await repo.apply_update(artwork, command)
        await db.commit()
        logger.info(f"Updated artwork {artwork_id}: {sorted(command.model_fields_set)}")
        await revalidator.revalidate_pattern("artwork")
        return ArtworkResponse.model_validate(artwork)
    except Exception as e:
        logger.error(f"Error updating artwork {artwork_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update artwork", "detail": str(e)}
        )


@router.delete("/{artwork_id}")
async def delete_artwork(
    artwork_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Delete an artwork together with its inquiries.

    After the row is gone the private original is removed from Cloudinary.
    A failed Cloudinary deletion is logged and does not undo the database delete.

    Returns:
        dict: Success message and the deleted artwork ID
    """
    repo = ArtworkRepository(db)
    artwork = await _get_artwork_or_404(repo, artwork_id)
    ensure_artwork_access(user, artwork.artist_id)
    image_url = artwork.original_image

    try:
        await repo.delete(artwork)
        await db.commit()
        logger.info(f"Deleted artwork {artwork_id}")
    except Exception as e:
        logger.error(f"Error deleting artwork {artwork_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete artwork", "detail": str(e)}
        )

    await _delete_stored_image(artwork_id, image_url)
    await revalidator.revalidate_pattern("artwork")
    return {"message": "Artwork deleted successfully", "id": artwork_id}


async def _delete_stored_image(artwork_id: int, image_url: Optional[str]) -> None:
    if not image_url:
        return
    try:
        public_id, image_type = extract_public_id(image_url)
    except ValueError as e:
        logger.warning(f"Skipping Cloudinary deletion for artwork {artwork_id}: {str(e)}")
        return

    try:
        result = await delete_image(public_id, image_type=image_type)
        logger.info(f"Deleted Cloudinary asset {public_id} for artwork {artwork_id}, result: {result}")
    except Exception as e:
        logger.error(
            f"Failed to delete from Cloudinary for artwork {artwork_id} (public_id: {public_id}): {str(e)}",
            exc_info=True
        )


async def _apply_state(
    db: AsyncSession,
    artwork_id: int,
    revalidator: CacheRevalidator,
    command: ArtworkStateUpdate,
) -> ArtworkResponse:
    repo = ArtworkRepository(db)
    artwork = await _get_artwork_or_404(repo, artwork_id)
    try:
        artwork = await repo.apply_update(artwork, command)
        await db.commit()
    except Exception as e:
        logger.error(f"Error updating artwork {artwork_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update artwork", "detail": str(e)}
        )
    await revalidator.revalidate_pattern("artwork")
    return ArtworkResponse.model_validate(artwork)


@router.post("/{artwork_id}/toggle-visibility", response_model=ArtworkResponse)
async def toggle_artwork_visibility(
    artwork_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    artwork = await _get_artwork_or_404(ArtworkRepository(db), artwork_id)
    command = ArtworkStateUpdate(is_visible=not artwork.is_visible)
    logger.info(f"Setting artwork {artwork_id} visibility to {command.is_visible}")
    return await _apply_state(db, artwork_id, revalidator, command)


@router.put("/{artwork_id}/featured", response_model=ArtworkResponse)
async def set_artwork_featured(
    artwork_id: int,
    body: FeaturedUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    return await _apply_state(db, artwork_id, revalidator, ArtworkStateUpdate(featured=body.featured))


@router.put("/{artwork_id}/location", response_model=ArtworkResponse)
async def set_artwork_location(
    artwork_id: int,
    body: LocationUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    return await _apply_state(db, artwork_id, revalidator, ArtworkStateUpdate(location=body.location))


@router.put("/{artwork_id}/approval", response_model=ArtworkResponse)
async def set_artwork_approval(
    artwork_id: int,
    body: ApprovalUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Approve or reject a submitted artwork (admin only).

    Raises:
        HTTPException: 404 if the artwork does not exist
    """
    repo = ArtworkRepository(db)
    artwork = await _get_artwork_or_404(repo, artwork_id)
    try:
        artwork.approval_status = body.approval_status
        await db.commit()
        await db.refresh(artwork)
    except Exception as e:
        logger.error(f"Error setting approval of artwork {artwork_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update approval status", "detail": str(e)}
        )

    logger.info(f"Artwork {artwork_id} {body.approval_status} by {user.user_id}")
    await revalidator.revalidate_pattern("artwork")
    return ArtworkResponse.model_validate(artwork)
