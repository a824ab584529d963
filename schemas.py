"""
Request schemas

Pydantic models for every JSON body and query string the API accepts.
Payloads validate incoming writes; the *Filters models are the typed filter
structs handed to the list operations in ``services``.

Field names are snake_case in Python and camelCase on the wire
(``maxParticipants`` -> ``max_participants``); both spellings are accepted.
"""

from datetime import date
from typing import List, Literal, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

import errors

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

TourStatus = Literal["confirmed", "pending", "completed", "cancelled"]
TourDifficulty = Literal["easy", "moderate", "challenging"]
BookingStatus = Literal["pending", "confirmed", "completed", "cancelled", "refunded"]
Availability = Literal["available", "partially_available", "unavailable"]
DestinationDifficulty = Literal["easy", "moderate", "challenging", "extreme"]
NotificationType = Literal["info", "warning", "success", "error"]
SearchCategory = Literal["general", "destinations", "guides", "latest"]


class Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def parse(schema, data):
    """Validate ``data`` against ``schema`` or raise errors.ValidationError."""
    try:
        return schema.model_validate(data or {})
    except pydantic.ValidationError as exc:
        raise errors.ValidationError.from_pydantic(exc)


def parse_args(schema, args):
    """Same as parse() for a query string; blank parameters count as absent."""
    data = {k: v for k, v in args.items() if v not in ("", None)}
    return parse(schema, data)


def _check_date_order(start, end):
    if start and end and end < start:
        raise ValueError("endDate must be on or after startDate")


# ----------------------------
# Auth
# ----------------------------

class RegisterPayload(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=120)
    password: str = Field(..., min_length=8)


class LoginPayload(Schema):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ----------------------------
# Guides & schedules
# ----------------------------

class TourPayload(Schema):
    """A guide schedule entry."""
    destination: str = Field(..., min_length=2)
    location: str = Field(..., min_length=2)
    start_date: date
    end_date: date
    description: str = Field(..., min_length=10)
    max_participants: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    status: TourStatus
    difficulty: TourDifficulty
    itinerary: str = Field(..., min_length=10)

    @model_validator(mode="after")
    def dates_in_order(self):
        _check_date_order(self.start_date, self.end_date)
        return self


class TourUpdate(Schema):
    destination: Optional[str] = Field(None, min_length=2)
    location: Optional[str] = Field(None, min_length=2)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = Field(None, min_length=10)
    max_participants: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[TourStatus] = None
    difficulty: Optional[TourDifficulty] = None
    itinerary: Optional[str] = Field(None, min_length=10)


class ScheduleFilters(Schema):
    status: Optional[TourStatus] = None


class GuidePayload(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1)
    photo: Optional[str] = None
    country: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    bio: str = Field(..., min_length=1)
    languages: List[str] = Field(..., min_length=1)
    specialties: List[str] = Field(..., min_length=1)
    experience_years: int = Field(0, ge=0)
    experience_level: str = "intermediate"
    hourly_rate: float = Field(..., ge=0)
    availability: Availability = "available"
    rating: float = Field(0, ge=0, le=5)


class GuideUpdate(Schema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, min_length=1)
    photo: Optional[str] = None
    country: Optional[str] = Field(None, min_length=1)
    region: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = Field(None, min_length=1)
    languages: Optional[List[str]] = Field(None, min_length=1)
    specialties: Optional[List[str]] = Field(None, min_length=1)
    experience_years: Optional[int] = Field(None, ge=0)
    experience_level: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    availability: Optional[Availability] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class GuideFilters(Schema):
    search: Optional[str] = None
    language: Optional[str] = None
    specialty: Optional[str] = None
    availability: Optional[Availability] = None
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)


class LimitQuery(Schema):
    limit: int = Field(5, ge=1)


# ----------------------------
# Destinations
# ----------------------------

class DestinationPayload(Schema):
    name: str = Field(..., min_length=2, max_length=150)
    country: str = Field(..., min_length=2)
    region: Optional[str] = Field(None, min_length=2)
    description: str = Field(..., min_length=20)
    difficulty: DestinationDifficulty = "moderate"
    price_amount: float = Field(..., gt=0)
    price_currency: str = Field("USD", min_length=3, max_length=3)
    featured: bool = False


class DestinationUpdate(Schema):
    name: Optional[str] = Field(None, min_length=2, max_length=150)
    country: Optional[str] = Field(None, min_length=2)
    region: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = Field(None, min_length=20)
    difficulty: Optional[DestinationDifficulty] = None
    price_amount: Optional[float] = Field(None, gt=0)
    price_currency: Optional[str] = Field(None, min_length=3, max_length=3)
    featured: Optional[bool] = None


class DestinationFilters(Schema):
    search: Optional[str] = None
    country: Optional[str] = None
    difficulty: Optional[str] = None
    featured: Optional[bool] = None
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)


# ----------------------------
# Bookings
# ----------------------------

class BookingPayload(Schema):
    destination_id: int
    guide_id: Optional[int] = None
    start_date: date
    end_date: date
    duration: Optional[int] = Field(None, ge=1)
    total_travelers: int = Field(1, ge=1)
    total_amount: float = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    status: BookingStatus = "pending"

    @model_validator(mode="after")
    def dates_in_order(self):
        _check_date_order(self.start_date, self.end_date)
        return self


class BookingStatusUpdate(Schema):
    status: BookingStatus


class BookingFilters(Schema):
    search: Optional[str] = None
    status: Optional[BookingStatus] = None
    customer_id: Optional[int] = None
    destination_id: Optional[int] = None
    guide_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)


# ----------------------------
# Reviews
# ----------------------------

class ReviewPayload(Schema):
    guide_id: Optional[int] = None
    destination_id: Optional[int] = None
    rating: int = Field(..., ge=1, le=5)
    title: Optional[str] = Field(None, max_length=200)
    content: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    trip_start_date: Optional[date] = None
    trip_end_date: Optional[date] = None
    trip_duration: Optional[int] = Field(None, ge=1)
    trip_type: Optional[str] = None

    @model_validator(mode="after")
    def single_target(self):
        if (self.guide_id is None) == (self.destination_id is None):
            raise ValueError("exactly one of guideId or destinationId is required")
        _check_date_order(self.trip_start_date, self.trip_end_date)
        return self


class ReviewResponsePayload(Schema):
    content: str = Field(..., min_length=1)


class ReviewModeration(Schema):
    verified: bool


class ReviewFilters(Schema):
    """Guide and destination ids overlap, so ``entity_id`` needs a target type.

    The type comes from ``entity_type`` or from ``type`` being guides or
    destinations.
    """
    type: Literal["all", "guides", "destinations", "flagged"] = "all"
    status: Optional[Literal["approved", "flagged", "pending"]] = None
    entity_id: Optional[int] = None
    entity_type: Optional[Literal["guide", "destination"]] = None

    @model_validator(mode="after")
    def resolve_entity_type(self):
        implied = {"guides": "guide", "destinations": "destination"}.get(self.type)
        if self.entity_type and implied and self.entity_type != implied:
            raise ValueError("entityType does not match type")
        self.entity_type = self.entity_type or implied
        if self.entity_id is not None and self.entity_type is None:
            raise ValueError("entityId requires entityType when type is all or flagged")
        return self


# ----------------------------
# Notifications
# ----------------------------

class RelatedEntity(Schema):
    type: str
    id: str
    name: str


class NotificationPayload(Schema):
    """id, createdAt and read are assigned by the server."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    type: NotificationType
    recipient_id: Optional[int] = None
    action_url: Optional[str] = None
    action_label: Optional[str] = None
    related_entity: Optional[RelatedEntity] = None


class ReadFlag(Schema):
    read: bool = True


class NotificationFilters(Schema):
    type: Optional[Literal["info", "warning", "success", "error", "all"]] = None
    status: Optional[Literal["read", "unread", "all"]] = None
    search: Optional[str] = None
    limit: int = Field(10, ge=1, le=100)
    offset: int = Field(0, ge=0)


# ----------------------------
# Search
# ----------------------------

class SearchQuery(Schema):
    q: str = ""
    type: str = "general"
    count: int = Field(10, ge=1, le=20)
    offset: int = Field(0, ge=0, le=9)
