"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gallery_admin.config import settings
from gallery_admin.database import Base


class Artist(Base):
    """
    Artist profile.
    Owns zero or more artworks; visibility flags control the public site.
    """
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    profile_image = Column(String, nullable=True)
    specialty = Column(String, nullable=True)
    exhibitions = Column(JSON, nullable=True)
    email = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    portal_access = Column(Boolean, nullable=False, default=False)
    has_completed_onboarding = Column(Boolean, nullable=False, default=False)
    pre_approved = Column(Boolean, nullable=False, default=False)
    is_hidden = Column(Boolean, nullable=True, default=False)
    is_visible = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    artworks = relationship("Artwork", back_populates="artist")


class Artwork(Base):
    """
    Artwork owned by exactly one artist.

    global_display_order ranks the artwork across the whole gallery and
    artist_display_order ranks it inside its artist's portfolio; lower is shown first.
    """
    __tablename__ = "artworks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=False, index=True)
    year = Column(String, nullable=False)
    medium = Column(String, nullable=False)
    dimensions = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="Available")
    featured = Column(Integer, nullable=True, default=0)
    width_cm = Column(Numeric(8, 2), nullable=True)
    height_cm = Column(Numeric(8, 2), nullable=True)
    depth_cm = Column(Numeric(8, 2), nullable=True)
    is_sculpture = Column(Boolean, nullable=False, default=False)
    is_framed = Column(Boolean, nullable=False, default=False)
    location = Column(String, nullable=False, default="Gallery")
    original_image = Column(String, nullable=True)
    watermarked_image = Column(String, nullable=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    approval_status = Column(String, nullable=False, default="pending")
    artist_display_order = Column(Integer, nullable=True, default=0, index=True)
    global_display_order = Column(Integer, nullable=True, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    artist = relationship("Artist", back_populates="artworks")
    inquiries = relationship("Inquiry", back_populates="artwork", cascade="all, delete-orphan")


class Event(Base):
    """
    Gallery event with scheduling, recurrence and registration settings.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    description = Column(Text, nullable=False)
    event_type = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String, nullable=True)
    address = Column(String, nullable=True)
    featured_image = Column(String, nullable=True)
    status = Column(String, nullable=True, default="Upcoming")
    is_canceled = Column(Boolean, nullable=False, default=False)
    registration_enabled = Column(Boolean, nullable=False, default=False)
    registration_type = Column(String, nullable=False, default="modal")
    registration_url = Column(String, nullable=True)
    external_url = Column(String, nullable=True)
    payment_enabled = Column(Boolean, nullable=False, default=False)
    is_free_event = Column(Boolean, nullable=False, default=False)
    payment_tiers = Column(JSON, nullable=True, default=list)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_type = Column(String, nullable=True)
    recurring_days = Column(JSON, nullable=True)
    recurring_start_time = Column(String, nullable=True)
    recurring_end_time = Column(String, nullable=True)
    parent_event_id = Column(Integer, ForeignKey("events.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=False,
    )


class EventRegistration(Base):
    """
    Attendee registration for one event.
    registration_data keeps a JSON snapshot of the submitted form.
    """
    __tablename__ = "event_registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone_number = Column(String, nullable=True)
    number_of_attendees = Column(Integer, nullable=False, default=1)
    additional_information = Column(Text, nullable=True)
    registration_data = Column(JSON, nullable=True, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    event = relationship("Event", back_populates="registrations")


class Inquiry(Base):
    """Purchase/info inquiry about one artwork."""
    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    artwork_id = Column(Integer, ForeignKey("artworks.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    artwork = relationship("Artwork", back_populates="inquiries")


def _invitation_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=settings.INVITATION_TTL_DAYS)


class ArtistInvitation(Base):
    """
    One-time onboarding code for a new artist.
    A code is usable while used_at is null and expires_at is in the future.
    """
    __tablename__ = "artist_invitations"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    specialty = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    code = Column(String, nullable=False, unique=True)
    invited_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True, default=_invitation_expiry)
