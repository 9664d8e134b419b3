"""
Artwork data access.
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Set, Tuple, Union

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import Artist, Artwork
from gallery_admin.schemas import ArtworkCreate, ArtworkStateUpdate, ArtworkUpdate, SortableArtwork
from gallery_admin.utils.text import slugify

UNKNOWN_ARTIST = "Unknown Artist"


class ArtworkRepository:
    """Typed queries and writes for the artworks table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, artwork_id: int) -> Optional[Artwork]:
        result = await self.db.execute(select(Artwork).where(Artwork.id == artwork_id))
        return result.scalar_one_or_none()

    async def list_with_artist_name(self, artist_id: Optional[int] = None) -> List[Tuple[Artwork, Optional[str]]]:
        """Artworks (newest first) paired with the owning artist's name."""
        query = (
            select(Artwork, Artist.name)
            .outerjoin(Artist, Artwork.artist_id == Artist.id)
            .order_by(Artwork.created_at.desc(), Artwork.id.desc())
        )
        if artist_id is not None:
            query = query.where(Artwork.artist_id == artist_id)
        result = await self.db.execute(query)
        return [(artwork, name) for artwork, name in result.all()]

    async def list_sortable(self) -> List[SortableArtwork]:
        """
        All artworks projected for the global sorting screen,
        ordered by global_display_order, newest first on ties.
        """
        result = await self.db.execute(
            select(
                Artwork.id,
                Artwork.title,
                Artist.name,
                Artwork.watermarked_image,
                Artwork.global_display_order,
                Artwork.is_visible,
            )
            .outerjoin(Artist, Artwork.artist_id == Artist.id)
            .order_by(Artwork.global_display_order.asc(), Artwork.created_at.desc())
        )
        return [
            SortableArtwork(
                id=row.id,
                title=row.title,
                artist_name=row.name or UNKNOWN_ARTIST,
                image_url=row.watermarked_image,
                global_display_order=row.global_display_order or 0,
                is_visible=row.is_visible,
            )
            for row in result.all()
        ]

    async def list_for_artist(self, artist_id: int) -> List[Artwork]:
        """One artist's portfolio in artist_display_order, newest first on ties."""
        result = await self.db.execute(
            select(Artwork)
            .where(Artwork.artist_id == artist_id)
            .order_by(Artwork.artist_display_order.asc(), Artwork.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_ids_newest_first(self) -> List[int]:
        result = await self.db.execute(
            select(Artwork.id).order_by(Artwork.created_at.desc(), Artwork.id.desc())
        )
        return list(result.scalars().all())

    async def list_oldest_first(self) -> List[Artwork]:
        result = await self.db.execute(
            select(Artwork).order_by(Artwork.created_at.asc(), Artwork.id.asc())
        )
        return list(result.scalars().all())

    async def existing_ids(self, artwork_ids: Iterable[int], artist_id: Optional[int] = None) -> Set[int]:
        """Subset of artwork_ids present in the table (optionally owned by artist_id)."""
        query = select(Artwork.id).where(Artwork.id.in_(list(artwork_ids)))
        if artist_id is not None:
            query = query.where(Artwork.artist_id == artist_id)
        result = await self.db.execute(query)
        return set(result.scalars().all())

    async def bulk_update_orders(self, rows: Sequence[dict]) -> None:
        """
        ORM bulk UPDATE by primary key.
        Each row holds "id" plus the order column(s) to set. Does not commit.
        """
        await self.db.execute(update(Artwork), list(rows))

    async def unique_slug(self, title: str) -> str:
        base = slugify(title) or "artwork"
        result = await self.db.execute(
            select(Artwork.slug).where(
                (Artwork.slug == base) | (Artwork.slug.like(f"{base}-%"))
            )
        )
        taken = set(result.scalars().all())
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"

    async def create(self, data: ArtworkCreate, approval_status: str = "pending") -> Artwork:
        artwork = Artwork(
            **data.model_dump(),
            slug=await self.unique_slug(data.title),
            approval_status=approval_status,
        )
        self.db.add(artwork)
        await self.db.flush()
        await self.db.refresh(artwork)
        return artwork

    async def apply_update(self, artwork: Artwork, command: Union[ArtworkUpdate, ArtworkStateUpdate]) -> Artwork:
        for field, value in command.model_dump(exclude_unset=True).items():
            setattr(artwork, field, value)
        await self.db.flush()
        await self.db.refresh(artwork)
        return artwork

    async def delete(self, artwork: Artwork) -> None:
        await self.db.delete(artwork)
        await self.db.flush()

    async def count(self, artist_id: Optional[int] = None) -> int:
        query = select(func.count(Artwork.id))
        if artist_id is not None:
            query = query.where(Artwork.artist_id == artist_id)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def visible_worth(self) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Artwork.price), 0)).where(Artwork.is_visible.is_(True))
        )
        return Decimal(str(result.scalar() or 0))
