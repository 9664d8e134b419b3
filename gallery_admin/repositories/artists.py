"""
Artist data access.
"""
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import Artist, Artwork
from gallery_admin.schemas import ArtistProfileUpdate, ArtistSettingsUpdate
from gallery_admin.utils.text import slugify, split_lines


class ArtistRepository:
    """Typed queries and writes for the artists table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, artist_id: int) -> Optional[Artist]:
        result = await self.db.execute(select(Artist).where(Artist.id == artist_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Artist]:
        result = await self.db.execute(
            select(Artist).where(func.lower(Artist.email) == email.lower()).limit(1)
        )
        return result.scalar_one_or_none()

    async def list_with_artwork_counts(self) -> List[Tuple[Artist, int]]:
        artwork_count = (
            select(func.count(Artwork.id))
            .where(Artwork.artist_id == Artist.id)
            .correlate(Artist)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(Artist, artwork_count).order_by(Artist.created_at.desc(), Artist.id.desc())
        )
        return [(artist, count or 0) for artist, count in result.all()]

    async def create(self, name: str, email: Optional[str] = None, specialty: Optional[str] = None) -> Artist:
        artist = Artist(
            name=name,
            slug=slugify(name),
            email=email,
            specialty=specialty,
            portal_access=True,
        )
        self.db.add(artist)
        await self.db.flush()
        await self.db.refresh(artist)
        return artist

    async def update_profile(self, artist: Artist, command: ArtistProfileUpdate) -> Artist:
        artist.name = command.name
        artist.slug = command.slug or slugify(command.name)
        artist.bio = command.bio or None
        artist.specialty = command.specialty or None
        artist.exhibitions = split_lines(command.exhibitions)
        artist.profile_image = command.profile_image or None
        if command.pre_approved is not None:
            artist.pre_approved = command.pre_approved
        await self.db.flush()
        await self.db.refresh(artist)
        return artist

    async def update_settings(self, artist: Artist, command: ArtistSettingsUpdate) -> Artist:
        for field, value in command.model_dump(exclude_none=True).items():
            setattr(artist, field, value)
        await self.db.flush()
        await self.db.refresh(artist)
        return artist

    async def delete(self, artist: Artist) -> None:
        await self.db.delete(artist)
        await self.db.flush()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Artist.id)))
        return result.scalar() or 0
