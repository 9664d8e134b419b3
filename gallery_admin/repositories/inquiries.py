"""
Inquiry data access.
"""
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import Artwork, Inquiry
from gallery_admin.schemas import InquiryCreate


class InquiryRepository:
    """Typed queries and writes for the inquiries table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, inquiry_id: int) -> Optional[Inquiry]:
        result = await self.db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
        return result.scalar_one_or_none()

    async def list_with_artwork_title(self) -> List[Tuple[Inquiry, Optional[str]]]:
        result = await self.db.execute(
            select(Inquiry, Artwork.title)
            .outerjoin(Artwork, Inquiry.artwork_id == Artwork.id)
            .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        )
        return [(inquiry, title) for inquiry, title in result.all()]

    async def create(self, data: InquiryCreate) -> Inquiry:
        inquiry = Inquiry(**data.model_dump())
        self.db.add(inquiry)
        await self.db.flush()
        await self.db.refresh(inquiry)
        return inquiry

    async def delete(self, inquiry: Inquiry) -> None:
        await self.db.delete(inquiry)
        await self.db.flush()
