"""
Event and event registration routes.
Admins manage events and their registrations; the public registration form posts here.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from gallery_admin.database import get_db
from gallery_admin.models import Event, EventRegistration
from gallery_admin.repositories.events import EventRepository, RegistrationRepository
from gallery_admin.schemas import (
    EventCreate,
    EventResponse,
    EventUpdate,
    RegistrationCreate,
    RegistrationResponse,
    RegistrationStats,
    RegistrationUpdate,
)
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, require_admin
from gallery_admin.utils.dates import count_since
from gallery_admin.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])
registrations_router = APIRouter(prefix="/registrations", tags=["Events"])

RECENT_REGISTRATION_DAYS = 7


async def _get_event_or_404(repo: EventRepository, event_id: int) -> Event:
    event = await repo.get(event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Event not found", "detail": f"Event ID {event_id} does not exist"}
        )
    return event


async def _get_registration_or_404(repo: RegistrationRepository, registration_id: int) -> EventRegistration:
    registration = await repo.get(registration_id)
    if not registration:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Registration not found", "detail": f"Registration ID {registration_id} does not exist"}
        )
    return registration


def _duplicate_title(title: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": "Duplicate event title", "detail": f"An event titled '{title}' already exists"}
    )


@router.get("", response_model=List[EventResponse])
async def list_events(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """List all events, latest start date first."""
    try:
        events = await EventRepository(db).list_all()
        logger.info(f"Retrieved {len(events)} events")
        return [EventResponse.model_validate(e) for e in events]
    except Exception as e:
        logger.error(f"Failed to retrieve events: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to retrieve events", "detail": str(e)}
        )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    event = await _get_event_or_404(EventRepository(db), event_id)
    return EventResponse.model_validate(event)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """
    Create an event. The slug is derived from the title.

    Raises:
        HTTPException: 400 if an event with the same title (or slug) exists,
            500 if the insert fails
    """
    repo = EventRepository(db)
    if await repo.title_taken(event_data.title):
        raise _duplicate_title(event_data.title)

    try:
        event = await repo.create(event_data)
        await db.commit()
    except Exception as e:
        logger.error(f"Error creating event: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create event", "detail": str(e)}
        )

    logger.info(f"Created event {event.id} '{event.title}'")
    await revalidator.revalidate_pattern("events")
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    command: EventUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    repo = EventRepository(db)
    event = await _get_event_or_404(repo, event_id)

    if command.title is not None and await repo.title_taken(command.title, exclude_id=event_id):
        raise _duplicate_title(command.title)

    try:
        event = await repo.apply_update(event, command)
        await db.commit()
    except Exception as e:
        logger.error(f"Error updating event {event_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update event", "detail": str(e)}
        )

    await revalidator.revalidate_pattern("events")
    return EventResponse.model_validate(event)


@router.post("/{event_id}/toggle-cancellation", response_model=EventResponse)
async def toggle_event_cancellation(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    event = await _get_event_or_404(EventRepository(db), event_id)
    event.is_canceled = not event.is_canceled
    await db.commit()
    await db.refresh(event)

    logger.info(f"Event {event_id} canceled={event.is_canceled}")
    await revalidator.revalidate_pattern("events")
    return EventResponse.model_validate(event)


@router.delete("/{event_id}")
async def delete_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
    revalidator: CacheRevalidator = Depends(get_revalidator),
):
    """Delete an event and all of its registrations."""
    repo = EventRepository(db)
    event = await _get_event_or_404(repo, event_id)

    try:
        await repo.delete(event)
        await db.commit()
    except Exception as e:
        logger.error(f"Error deleting event {event_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete event", "detail": str(e)}
        )

    logger.info(f"Deleted event {event_id}")
    await revalidator.revalidate_pattern("events")
    return {"message": "Event deleted successfully", "id": event_id}


# Registrations

@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_LIMITS["public_form"])
async def create_registration(
    request: Request,
    event_id: int,
    registration: RegistrationCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register for an event (public).

    The submitted fields are also stored as a JSON snapshot in registration_data.

    Raises:
        HTTPException: 404 if the event does not exist, 400 if registration is closed
    """
    event = await _get_event_or_404(EventRepository(db), event_id)
    if not event.registration_enabled:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Registration closed", "detail": "Registration is not enabled for this event"}
        )

    try:
        created = await RegistrationRepository(db).create(event, registration)
        await db.commit()
    except Exception as e:
        logger.error(f"Error creating registration for event {event_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create registration", "detail": str(e)}
        )

    logger.info(f"New registration {created.id} for event {event_id} ({created.number_of_attendees} attendees)")
    return RegistrationResponse.model_validate(created)


@router.get("/{event_id}/registrations", response_model=List[RegistrationResponse])
async def list_registrations(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    await _get_event_or_404(EventRepository(db), event_id)
    registrations = await RegistrationRepository(db).list_for_event(event_id)
    return [RegistrationResponse.model_validate(r) for r in registrations]


@router.get("/{event_id}/registrations/stats", response_model=RegistrationStats)
async def get_registration_stats(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    """Registration count, attendee total and registrations of the last 7 days for one event."""
    await _get_event_or_404(EventRepository(db), event_id)
    registrations = await RegistrationRepository(db).list_for_event(event_id)
    return RegistrationStats(
        total=len(registrations),
        total_attendees=sum(r.number_of_attendees for r in registrations),
        recent_registrations=count_since((r.created_at for r in registrations), RECENT_REGISTRATION_DAYS),
    )


@registrations_router.put("/{registration_id}", response_model=RegistrationResponse)
async def update_registration(
    registration_id: int,
    command: RegistrationUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    repo = RegistrationRepository(db)
    registration = await _get_registration_or_404(repo, registration_id)

    try:
        registration = await repo.apply_update(registration, command)
        await db.commit()
    except Exception as e:
        logger.error(f"Error updating registration {registration_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update registration", "detail": str(e)}
        )

    return RegistrationResponse.model_validate(registration)


@registrations_router.delete("/{registration_id}")
async def delete_registration(
    registration_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    repo = RegistrationRepository(db)
    registration = await _get_registration_or_404(repo, registration_id)
    await repo.delete(registration)
    await db.commit()

    logger.info(f"Deleted registration {registration_id}")
    return {"message": "Registration deleted successfully", "id": registration_id}
