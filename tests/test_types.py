"""Tests for request/response models and error classification."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from booking_demo.errors import BookingApiError, ErrorKind
from booking_demo.types import (
    BookingResponse,
    BookingStatus,
    CreateBookingRequest,
    CreateRoomRequest,
    DemoContext,
)

START = datetime(2026, 7, 1, 9, 0, tzinfo=timezone.utc)


def booking_request(**overrides) -> CreateBookingRequest:
    fields = {
        "room_id": 1,
        "title": "Standup",
        "organizer_email": "test@example.com",
        "start_time": START,
        "end_time": START + timedelta(hours=1),
    }
    fields.update(overrides)
    return CreateBookingRequest(**fields)


class TestCreateBookingRequest:
    """Tests for CreateBookingRequest validation."""

    def test_valid_slot(self):
        request = booking_request()
        assert request.start_time < request.end_time

    def test_end_before_start_rejected(self):
        """End time before start time should fail validation."""
        with pytest.raises(ValidationError, match="End time must be after start time"):
            booking_request(end_time=START - timedelta(minutes=1))

    def test_empty_slot_rejected(self):
        """A zero-length slot should fail validation."""
        with pytest.raises(ValidationError):
            booking_request(end_time=START)

    def test_request_is_frozen(self):
        """Submitted requests must not be mutated."""
        request = booking_request()
        with pytest.raises(ValidationError):
            request.title = "changed"

    def test_accepts_camel_case(self):
        """Requests can be built from the wire format too."""
        request = CreateBookingRequest.model_validate({
            "roomId": 2,
            "title": "Retro",
            "organizerEmail": "a@example.com",
            "startTime": "2026-07-01T09:00:00Z",
            "endTime": "2026-07-01T10:00:00Z",
        })
        assert request.room_id == 2
        assert request.start_time == START


class TestCreateRoomRequest:
    """Tests for CreateRoomRequest validation."""

    @pytest.mark.parametrize("capacity", [0, 1001])
    def test_capacity_bounds(self, capacity):
        with pytest.raises(ValidationError):
            CreateRoomRequest(name="Everest", capacity=capacity)

    def test_description_optional(self):
        request = CreateRoomRequest(name="Everest", capacity=8)
        assert request.to_json() == {"name": "Everest", "capacity": 8}


class TestBookingStatus:
    """Tests for BookingStatus."""

    def test_prints_as_value(self):
        assert f"{BookingStatus.CONFIRMED}" == "CONFIRMED"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            BookingResponse.model_validate({"id": 1, "status": "ARCHIVED"})


class TestErrorKind:
    """Tests for HTTP status classification."""

    @pytest.mark.parametrize(
        "status_code,kind",
        [
            (400, ErrorKind.VALIDATION),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (500, ErrorKind.SERVER),
            (503, ErrorKind.SERVER),
            (401, ErrorKind.UNKNOWN),
        ],
    )
    def test_from_status(self, status_code, kind):
        assert ErrorKind.from_status(status_code) is kind

    def test_error_defaults(self):
        error = BookingApiError("boom")
        assert error.kind is ErrorKind.UNKNOWN
        assert error.status_code is None
        assert str(error) == "boom"


def test_demo_context_starts_empty():
    context = DemoContext()
    assert context.created_room_id is None
    assert context.created_booking_id is None
