"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.

Update requests are closed command models (extra fields are rejected); only the
fields a client explicitly sets are written by the repositories.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Literal, Optional


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
SLUG_PATTERN = r"^[a-z0-9-]+$"

MAX_PRICE = 100000
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000

ArtworkStatus = Literal["Available", "Sold", "Reserved", "Draft", "Not for Sale"]
ApprovalStatus = Literal["pending", "approved", "rejected"]
ExportType = Literal["events", "artworks", "artists", "inquiries", "event-registrations"]


# ---------------------------------------------------------------------------
# Action results
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """Failure categories reported by write operations."""
    NOT_FOUND = "not_found"
    EMPTY_INPUT = "empty_input"
    STORE_ERROR = "store_error"


class ActionResult(BaseModel):
    """
    Tagged success/failure result returned by mutation services.
    Failures carry a human-readable error and its ErrorKind; they are never raised.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ActionResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "ActionResult":
        return cls(success=False, error=error, error_kind=kind)


# ---------------------------------------------------------------------------
# Display ordering
# ---------------------------------------------------------------------------

class SortableArtwork(BaseModel):
    """
    Artwork projection used by the global sorting screen.
    Returned by GET /api/admin/sorting/artworks.
    """
    id: int
    title: str
    artist_name: str
    image_url: Optional[str] = None
    global_display_order: int
    is_visible: bool

    model_config = ConfigDict(from_attributes=True)


class GlobalOrderUpdate(BaseModel):
    id: int
    global_display_order: int


class GlobalOrderRequest(BaseModel):
    """
    Request schema for saving the gallery-wide order.
    Used by PUT /api/admin/sorting/global-order.
    """
    updates: List[GlobalOrderUpdate]

    @field_validator("updates")
    @classmethod
    def validate_unique_ids(cls, v):
        ids = [u.id for u in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate artwork IDs are not allowed")
        return v


class ArtistOrderUpdate(BaseModel):
    id: int
    artist_display_order: int


class ArtistOrderRequest(BaseModel):
    """
    Request schema for ordering artworks inside one artist's portfolio.
    Used by PUT /api/artists/{artist_id}/artwork-order.
    """
    updates: List[ArtistOrderUpdate]

    @field_validator("updates")
    @classmethod
    def validate_unique_ids(cls, v):
        ids = [u.id for u in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate artwork IDs are not allowed")
        return v


class RandomizeRequest(BaseModel):
    """Shuffling overwrites the manual order, so callers must confirm explicitly."""
    confirm: bool = False


# ---------------------------------------------------------------------------
# Artworks
# ---------------------------------------------------------------------------

def _featured_flag(v):
    if isinstance(v, bool):
        return 1 if v else 0
    return v


class ArtworkCreate(BaseModel):
    """
    Request schema for creating an artwork.
    Used by POST /api/artworks.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(min_length=2, max_length=MAX_TITLE_LENGTH)
    artist_id: int = Field(gt=0)
    year: str = Field(pattern=r"^\d{4}$")
    medium: str = Field(min_length=2, max_length=100)
    dimensions: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=10, max_length=MAX_DESCRIPTION_LENGTH)
    price: Decimal = Field(ge=0, le=MAX_PRICE)
    status: ArtworkStatus = "Draft"
    featured: int = Field(default=0, ge=0, le=1)
    location: str = Field(default="Gallery", min_length=2, max_length=100)
    original_image: Optional[str] = None
    watermarked_image: Optional[str] = None
    width_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    height_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    depth_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    is_sculpture: bool = False
    is_framed: bool = False

    @field_validator("featured", mode="before")
    @classmethod
    def normalize_featured(cls, v):
        return _featured_flag(v)


class ArtworkUpdate(BaseModel):
    """
    Update command for an artwork.
    Used by PUT /api/artworks/{artwork_id}. Fields left unset are not touched.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=2, max_length=MAX_TITLE_LENGTH)
    year: Optional[str] = Field(default=None, pattern=r"^\d{4}$")
    medium: Optional[str] = Field(default=None, min_length=2, max_length=100)
    dimensions: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=MAX_DESCRIPTION_LENGTH)
    price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_PRICE)
    status: Optional[ArtworkStatus] = None
    featured: Optional[int] = Field(default=None, ge=0, le=1)
    original_image: Optional[str] = None
    watermarked_image: Optional[str] = None
    width_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    height_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    depth_cm: Optional[Decimal] = Field(default=None, gt=0, le=1000)
    is_sculpture: Optional[bool] = None
    is_framed: Optional[bool] = None

    @field_validator("featured", mode="before")
    @classmethod
    def normalize_featured(cls, v):
        return _featured_flag(v)


class ArtworkStateUpdate(BaseModel):
    """
    Admin-only gallery state of an artwork: visibility, featured flag and location.
    Display orders are written only through the sorting routes.
    """
    model_config = ConfigDict(extra="forbid")

    is_visible: Optional[bool] = None
    featured: Optional[int] = Field(default=None, ge=0, le=1)
    location: Optional[str] = Field(default=None, min_length=2, max_length=100)

    @field_validator("featured", mode="before")
    @classmethod
    def normalize_featured(cls, v):
        return _featured_flag(v)


class ArtworkResponse(BaseModel):
    """Full artwork record."""
    id: int
    title: str
    slug: str
    artist_id: int
    year: str
    medium: str
    dimensions: str
    description: str
    price: Decimal
    status: str
    featured: Optional[int] = 0
    location: str
    original_image: Optional[str] = None
    watermarked_image: Optional[str] = None
    width_cm: Optional[Decimal] = None
    height_cm: Optional[Decimal] = None
    depth_cm: Optional[Decimal] = None
    is_sculpture: bool
    is_framed: bool
    is_visible: bool
    approval_status: str
    artist_display_order: Optional[int] = 0
    global_display_order: Optional[int] = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArtworkListItem(BaseModel):
    """Admin listing row, joined with the owning artist's name."""
    id: int
    title: str
    slug: str
    artist_id: int
    artist_name: Optional[str] = None
    year: str
    medium: str
    price: Decimal
    status: str
    location: str
    watermarked_image: Optional[str] = None
    is_visible: bool
    featured: Optional[int] = 0
    approval_status: str
    created_at: datetime


class LocationUpdate(BaseModel):
    location: str = Field(min_length=2, max_length=100)


class FeaturedUpdate(BaseModel):
    featured: bool


class ApprovalUpdate(BaseModel):
    approval_status: Literal["approved", "rejected"]


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------

class ArtistProfileUpdate(BaseModel):
    """
    Profile command for an artist.
    exhibitions is free text with one exhibition per line.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    slug: Optional[str] = Field(default=None, min_length=2, max_length=100, pattern=SLUG_PATTERN)
    bio: Optional[str] = Field(default=None, max_length=2000)
    specialty: Optional[str] = Field(default=None, max_length=100)
    exhibitions: Optional[str] = Field(default=None, max_length=5000)
    profile_image: Optional[str] = None
    pre_approved: Optional[bool] = None


class ArtistSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    featured: bool
    is_visible: Optional[bool] = None
    is_hidden: Optional[bool] = None


class ArtistResponse(BaseModel):
    id: int
    name: str
    slug: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    specialty: Optional[str] = None
    exhibitions: Optional[List[str]] = None
    email: Optional[str] = None
    is_active: bool
    pre_approved: bool
    is_hidden: Optional[bool] = False
    is_visible: bool
    featured: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArtistListItem(ArtistResponse):
    artwork_count: int = 0


class ArtistPortfolioResponse(BaseModel):
    artist: ArtistResponse
    artworks: List[ArtworkResponse]


# ---------------------------------------------------------------------------
# Events & registrations
# ---------------------------------------------------------------------------

class EventCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(min_length=2, max_length=MAX_TITLE_LENGTH)
    description: str = Field(min_length=1)
    event_type: str = Field(min_length=1)
    start_date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    address: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[str] = "Upcoming"
    registration_enabled: bool = False
    registration_type: Literal["modal", "external"] = "modal"
    registration_url: Optional[str] = None
    external_url: Optional[str] = None
    payment_enabled: bool = False
    is_free_event: bool = False
    payment_tiers: List[dict] = Field(default_factory=list)
    is_recurring: bool = False
    recurring_type: Optional[str] = None
    recurring_days: Optional[List[str]] = None
    recurring_start_time: Optional[str] = None
    recurring_end_time: Optional[str] = None
    parent_event_id: Optional[int] = None


class EventUpdate(BaseModel):
    """Update command for an event. Fields left unset are not touched."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=2, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = Field(default=None, min_length=1)
    event_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    address: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[str] = None
    registration_enabled: Optional[bool] = None
    registration_type: Optional[Literal["modal", "external"]] = None
    registration_url: Optional[str] = None
    external_url: Optional[str] = None
    payment_enabled: Optional[bool] = None
    is_free_event: Optional[bool] = None
    payment_tiers: Optional[List[dict]] = None
    is_recurring: Optional[bool] = None
    recurring_type: Optional[str] = None
    recurring_days: Optional[List[str]] = None
    recurring_start_time: Optional[str] = None
    recurring_end_time: Optional[str] = None


class EventResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    event_type: str
    start_date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    address: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[str] = None
    is_canceled: bool
    registration_enabled: bool
    registration_type: str
    payment_enabled: bool
    is_free_event: bool
    is_recurring: bool
    recurring_type: Optional[str] = None
    recurring_days: Optional[List[str]] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegistrationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    full_name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone_number: Optional[str] = None
    number_of_attendees: int = Field(default=1, ge=1)
    additional_information: Optional[str] = None


class RegistrationUpdate(BaseModel):
    """Update command for a registration. Fields left unset are not touched."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    phone_number: Optional[str] = None
    number_of_attendees: Optional[int] = Field(default=None, ge=1)
    additional_information: Optional[str] = None


class RegistrationResponse(BaseModel):
    id: int
    event_id: int
    full_name: str
    email: str
    phone_number: Optional[str] = None
    number_of_attendees: int
    additional_information: Optional[str] = None
    registration_data: Optional[dict] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RegistrationStats(BaseModel):
    total: int
    total_attendees: int
    recent_registrations: int


# ---------------------------------------------------------------------------
# Inquiries
# ---------------------------------------------------------------------------

class InquiryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    artwork_id: int
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: Optional[str] = None
    message: str = Field(min_length=1, max_length=5000)


class InquiryResponse(BaseModel):
    id: int
    artwork_id: int
    artwork_title: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    created_at: datetime


class InquiryStats(BaseModel):
    total: int
    this_week: int
    this_month: int


# ---------------------------------------------------------------------------
# Artist invitations
# ---------------------------------------------------------------------------

class InvitationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    specialty: Optional[str] = None
    message: Optional[str] = None


class InvitationCreated(BaseModel):
    invitation_code: str
    setup_url: str
    expires_at: Optional[datetime] = None


class InvitationDetails(BaseModel):
    name: str
    email: str
    code: str
    created_at: datetime


class InvitationRedeem(BaseModel):
    code: str = Field(min_length=1)


class InvitationSummary(BaseModel):
    id: int
    name: str
    email: str
    code: str
    invited_by: str
    created_at: datetime
    used_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class InvitationStats(BaseModel):
    total: int
    pending: int
    used: int
    recent: List[InvitationSummary]


# ---------------------------------------------------------------------------
# Uploads & dashboard
# ---------------------------------------------------------------------------

class UploadResponse(BaseModel):
    original_url: str
    watermarked_url: str
    public_id: str


class AdminStats(BaseModel):
    total_artworks: int
    artworks_worth: str
    total_artists: int
    active_events: int
