"""
Artist invitation data access.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func, case, or_
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import ArtistInvitation
from gallery_admin.schemas import InvitationCreate
from gallery_admin.utils.text import generate_invitation_code


class InvitationRepository:
    """Typed queries and writes for the artist_invitations table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_code(self, code: str) -> Optional[ArtistInvitation]:
        result = await self.db.execute(
            select(ArtistInvitation).where(ArtistInvitation.code == code)
        )
        return result.scalar_one_or_none()

    async def has_pending(self, email: str) -> bool:
        """True while an unused, unexpired invitation exists for email."""
        result = await self.db.execute(
            select(ArtistInvitation.id)
            .where(
                ArtistInvitation.email == email,
                ArtistInvitation.used_at.is_(None),
                or_(ArtistInvitation.expires_at.is_(None), ArtistInvitation.expires_at > datetime.now(timezone.utc)),
            )
            .limit(1)
        )
        return result.first() is not None

    async def create(self, data: InvitationCreate, invited_by: str) -> ArtistInvitation:
        code = generate_invitation_code()
        while await self.get_by_code(code) is not None:
            code = generate_invitation_code()

        invitation = ArtistInvitation(
            email=data.email,
            name=data.name,
            specialty=data.specialty or None,
            message=data.message or None,
            code=code,
            invited_by=invited_by,
        )
        self.db.add(invitation)
        await self.db.flush()
        await self.db.refresh(invitation)
        return invitation

    async def mark_used(self, invitation: ArtistInvitation) -> ArtistInvitation:
        invitation.used_at = datetime.now(timezone.utc)
        await self.db.flush()
        return invitation

    async def counts(self) -> dict:
        result = await self.db.execute(
            select(
                func.count(ArtistInvitation.id),
                func.count(case((ArtistInvitation.used_at.is_(None), 1))),
                func.count(case((ArtistInvitation.used_at.is_not(None), 1))),
            )
        )
        total, pending, used = result.one()
        return {"total": total or 0, "pending": pending or 0, "used": used or 0}

    async def recent(self, limit: int = 10) -> List[ArtistInvitation]:
        result = await self.db.execute(
            select(ArtistInvitation)
            .order_by(ArtistInvitation.created_at.desc(), ArtistInvitation.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
