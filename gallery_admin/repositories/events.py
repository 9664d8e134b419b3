"""
Event and event registration data access.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from gallery_admin.models import Event, EventRegistration
from gallery_admin.schemas import EventCreate, EventUpdate, RegistrationCreate, RegistrationUpdate
from gallery_admin.utils.text import slugify


class EventRepository:
    """Typed queries and writes for the events table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, event_id: int) -> Optional[Event]:
        result = await self.db.execute(select(Event).where(Event.id == event_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Event]:
        result = await self.db.execute(select(Event).order_by(Event.start_date.desc()))
        return list(result.scalars().all())

    async def title_taken(self, title: str, exclude_id: Optional[int] = None) -> bool:
        query = select(Event.id).where(or_(Event.title == title, Event.slug == slugify(title)))
        if exclude_id is not None:
            query = query.where(Event.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def create(self, data: EventCreate) -> Event:
        event = Event(**data.model_dump(), slug=slugify(data.title))
        self.db.add(event)
        await self.db.flush()
        await self.db.refresh(event)
        return event

    async def apply_update(self, event: Event, command: EventUpdate) -> Event:
        changes = command.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(event, field, value)
        if "title" in changes:
            event.slug = slugify(event.title)
        await self.db.flush()
        await self.db.refresh(event)
        return event

    async def delete(self, event: Event) -> None:
        # Registrations go with the event (ORM cascade and ON DELETE CASCADE)
        await self.db.delete(event)
        await self.db.flush()

    async def count_active(self, now: Optional[datetime] = None) -> int:
        """Events that are not canceled and have not ended yet (or have no end date)."""
        now = now or datetime.now(timezone.utc)
        result = await self.db.execute(
            select(func.count(Event.id)).where(
                Event.is_canceled.is_(False),
                or_(Event.end_date.is_(None), Event.end_date >= now),
            )
        )
        return result.scalar() or 0


class RegistrationRepository:
    """Typed queries and writes for the event_registrations table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, registration_id: int) -> Optional[EventRegistration]:
        result = await self.db.execute(
            select(EventRegistration).where(EventRegistration.id == registration_id)
        )
        return result.scalar_one_or_none()

    async def list_for_event(self, event_id: int) -> List[EventRegistration]:
        result = await self.db.execute(
            select(EventRegistration)
            .where(EventRegistration.event_id == event_id)
            .order_by(EventRegistration.created_at.desc(), EventRegistration.id.desc())
        )
        return list(result.scalars().all())

    async def create(self, event: Event, data: RegistrationCreate) -> EventRegistration:
        fields = data.model_dump()
        registration = EventRegistration(
            event_id=event.id,
            **fields,
            registration_data={
                "event_title": event.title,
                "registration_fields": fields,
            },
        )
        self.db.add(registration)
        await self.db.flush()
        await self.db.refresh(registration)
        return registration

    async def apply_update(self, registration: EventRegistration, command: RegistrationUpdate) -> EventRegistration:
        for field, value in command.model_dump(exclude_unset=True).items():
            setattr(registration, field, value)
        registration.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        await self.db.refresh(registration)
        return registration

    async def delete(self, registration: EventRegistration) -> None:
        await self.db.delete(registration)
        await self.db.flush()
