"""
Artist invitation routes.
Admins invite artists by email; the invitee validates and redeems the one-time code
during account setup.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from gallery_admin.config import settings
from gallery_admin.database import get_db
from gallery_admin.models import ArtistInvitation
from gallery_admin.repositories.artists import ArtistRepository
from gallery_admin.repositories.invitations import InvitationRepository
from gallery_admin.schemas import (
    ArtistResponse,
    InvitationCreate,
    InvitationCreated,
    InvitationDetails,
    InvitationRedeem,
    InvitationStats,
    InvitationSummary,
)
from gallery_admin.services.email_service import EmailSender, get_email_sender, send_artist_invitation
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, require_admin
from gallery_admin.utils.dates import as_utc, utcnow
from gallery_admin.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invitations", tags=["Invitations"])


def setup_url(code: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/handler/setup?code={code}"


async def _get_usable_invitation(repo: InvitationRepository, code: str) -> ArtistInvitation:
    """
    Look up an invitation code that can still be redeemed.

    Raises:
        HTTPException: 404 for an unknown code, 400 if already used or expired
    """
    invitation = await repo.get_by_code(code)
    if not invitation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Invalid invitation code", "detail": f"No invitation with code {code}"}
        )
    if invitation.used_at is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invitation already used", "detail": "This invitation has already been used"}
        )
    if invitation.expires_at is not None and as_utc(invitation.expires_at) < utcnow():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invitation expired", "detail": "This invitation has expired"}
        )
    return invitation


@router.post("", response_model=InvitationCreated, status_code=status.HTTP_201_CREATED)
async def invite_artist(
    invitation_data: InvitationCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Create an invitation for a new artist (admin only).

    The invitation is stored first, then emailed to the artist with the one-time
    code and the account setup URL.

    Raises:
        HTTPException: 400 if an artist with the email exists or a pending
            invitation was already issued for it, 502 if the invitation was
            created but the email could not be sent
    """
    if await ArtistRepository(db).get_by_email(invitation_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Artist already exists", "detail": f"Artist with email {invitation_data.email} already exists"}
        )

    repo = InvitationRepository(db)
    if await repo.has_pending(invitation_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Pending invitation exists",
                "detail": f"Artist with email {invitation_data.email} already has a pending invitation"
            }
        )

    admin_name = user.display_name or user.user_id
    try:
        invitation = await repo.create(invitation_data, invited_by=admin_name)
        await db.commit()
    except Exception as e:
        logger.error(f"Error creating invitation for {invitation_data.email}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create invitation", "detail": str(e)}
        )

    logger.info(f"Invitation {invitation.code} created for {invitation.email} by {user.user_id}")

    invitation_url = setup_url(invitation.code)
    email_result = await send_artist_invitation(
        email_sender,
        artist_name=invitation.name,
        artist_email=invitation.email,
        invitation_code=invitation.code,
        admin_name=admin_name,
        setup_url=invitation_url,
    )
    if not email_result.success:
        logger.error(f"Failed to send invitation email to {invitation.email}: {email_result.error}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "Invitation created but email failed to send",
                "detail": email_result.error,
                "invitation_code": invitation.code,
                "setup_url": invitation_url,
            }
        )

    return InvitationCreated(
        invitation_code=invitation.code,
        setup_url=invitation_url,
        expires_at=invitation.expires_at,
    )


@router.get("/validate", response_model=InvitationDetails)
@limiter.limit(RATE_LIMITS["invitation"])
async def validate_invitation(
    request: Request,
    code: str,
    db: AsyncSession = Depends(get_db),
):
    """Check that an invitation code exists, is unused and has not expired (public)."""
    invitation = await _get_usable_invitation(InvitationRepository(db), code)
    return InvitationDetails(
        name=invitation.name,
        email=invitation.email,
        code=invitation.code,
        created_at=invitation.created_at,
    )


@router.post("/redeem", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["invitation"])
async def redeem_invitation(
    request: Request,
    redeem: InvitationRedeem,
    db: AsyncSession = Depends(get_db),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Redeem an invitation: create the artist profile and mark the code used.

    Both writes are committed together.

    Raises:
        HTTPException: 404 for an unknown code, 400 if already used or expired
    """
    repo = InvitationRepository(db)
    invitation = await _get_usable_invitation(repo, redeem.code)

    try:
        artist = await ArtistRepository(db).create(
            name=invitation.name,
            email=invitation.email,
            specialty=invitation.specialty,
        )
        await repo.mark_used(invitation)
        await db.commit()
    except Exception as e:
        logger.error(f"Error redeeming invitation {redeem.code}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to redeem invitation", "detail": str(e)}
        )

    logger.info(f"Invitation {invitation.code} redeemed, created artist {artist.id}")
    await revalidator.revalidate_pattern("artists")
    return ArtistResponse.model_validate(artist)


@router.get("/stats", response_model=InvitationStats)
async def get_invitation_stats(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """Invitation totals plus the 10 most recent invitations."""
    repo = InvitationRepository(db)
    counts = await repo.counts()
    recent = await repo.recent(10)
    return InvitationStats(
        **counts,
        recent=[InvitationSummary.model_validate(i) for i in recent],
    )
