"""
Booking API request/response types.

This module provides Pydantic models for:
- Requests sent to the booking service (rooms, bookings)
- Responses returned by it, including the standard error body

and the DemoContext dataclass the runner threads between steps.

Notes:
- The service speaks camelCase JSON; models use snake_case fields with
  camelCase aliases and accept either on input
- Timestamps are ISO 8601 UTC on the wire
- Request models are frozen so a submitted request is never mutated
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    """Base model mapping snake_case fields to the service's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _ApiRequest(_ApiModel):
    model_config = ConfigDict(frozen=True)

    def to_json(self) -> dict:
        """Serialize for a request body (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Rooms
# =============================================================================


class RoomFilter(_ApiRequest):
    """
    Filter for GET /api/v1/rooms.

    active_only=False includes deactivated rooms in the listing.
    """

    active_only: bool = False


class CreateRoomRequest(_ApiRequest):
    """Body of POST /api/v1/rooms."""

    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=1, le=1000)
    description: str | None = Field(default=None, max_length=1000)


class RoomResponse(_ApiModel):
    """
    Room as returned by the list, fetch and create operations.

    Example response:
    {
        "id": 1,
        "name": "Everest",
        "capacity": 12,
        "description": "3rd floor, projector",
        "active": true,
        "createdAt": "2025-01-15T08:00:00Z",
        "updatedAt": "2025-06-01T12:30:00Z"
    }
    """

    id: int
    name: str
    capacity: int | None = None
    description: str | None = None
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Bookings
# =============================================================================


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

    def __str__(self) -> str:
        return self.value


class CreateBookingRequest(_ApiRequest):
    """
    Body of POST /api/v1/bookings.

    The server rejects slots in the past; this model only enforces that the
    slot is non-empty.
    """

    room_id: int
    title: str = Field(min_length=1, max_length=200)
    organizer_email: str = Field(min_length=3, max_length=255)
    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def _end_after_start(self) -> "CreateBookingRequest":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class BookingResponse(_ApiModel):
    """Booking as returned by create, confirm and cancel."""

    id: int
    room_id: int | None = None
    room_name: str | None = None
    title: str | None = None
    organizer_email: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int | None = None
    status: BookingStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Errors
# =============================================================================


class ErrorResponse(_ApiModel):
    """
    Standard error body of the booking service.

    Only message is guaranteed; the rest depends on the failure.
    """

    status: int | None = None
    error: str | None = None
    error_code: str | None = None
    message: str
    path: str | None = None


# =============================================================================
# Runner state
# =============================================================================


@dataclass
class DemoContext:
    """
    State carried from one demo step to a later one within a single run.

    Attributes:
        created_room_id: ID of the room created in step 2, None until it succeeds.
        created_booking_id: ID of the booking created in step 4; steps 5 and 6
            are skipped while this is None.
    """

    created_room_id: int | None = None
    created_booking_id: int | None = None
