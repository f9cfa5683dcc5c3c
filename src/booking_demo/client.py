"""
HTTP client for the room booking REST API.

This module provides:
- ApiClientProtocol: the operations the demo runner consumes
- BookingApiClient: implementation over an injected httpx.AsyncClient

BookingApiClient receives an httpx.AsyncClient with base_url set to the
booking service. All methods are async and raise BookingApiError on any
failure, whether transport, HTTP status or malformed body.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import pydantic

from booking_demo.errors import BookingApiError, ErrorKind
from booking_demo.types import (
    BookingResponse,
    CreateBookingRequest,
    CreateRoomRequest,
    ErrorResponse,
    RoomFilter,
    RoomResponse,
)

logger = logging.getLogger(__name__)

ROOMS_PATH = "/api/v1/rooms"
BOOKINGS_PATH = "/api/v1/bookings"


class ApiClientProtocol(Protocol):
    """
    Protocol for the booking service operations used by the demo.

    Implementations raise an exception on failure and return the parsed
    response on success.
    """

    async def list_rooms(self, room_filter: RoomFilter) -> list[RoomResponse]: ...

    async def create_room(self, request: CreateRoomRequest) -> RoomResponse: ...

    async def get_room(self, room_id: int) -> RoomResponse: ...

    async def create_booking(self, request: CreateBookingRequest) -> BookingResponse: ...

    async def confirm_booking(self, booking_id: int) -> BookingResponse: ...

    async def cancel_booking(self, booking_id: int) -> BookingResponse: ...


@dataclass
class BookingApiClient:
    """
    Booking API client with injected httpx client.

    Attributes:
        http: Pre-configured httpx.AsyncClient with base_url set to the booking service.

    Example:
        async with httpx.AsyncClient(base_url="http://localhost:8080") as http:
            client = BookingApiClient(http=http)
            rooms = await client.list_rooms(RoomFilter(active_only=False))
            for room in rooms:
                print(f"Room {room.id}: {room.name}")
    """

    http: httpx.AsyncClient

    async def list_rooms(self, room_filter: RoomFilter) -> list[RoomResponse]:
        """
        List rooms.

        Calls GET /api/v1/rooms?activeOnly=...

        Args:
            room_filter: activeOnly=False includes inactive rooms.

        Returns:
            Rooms in the order the service returned them.

        Raises:
            BookingApiError: On transport, HTTP or parsing failure.
        """
        params = {"activeOnly": str(room_filter.active_only).lower()}
        data = await self._request("GET", ROOMS_PATH, params=params)
        return self._parse_list(RoomResponse, data)

    async def create_room(self, request: CreateRoomRequest) -> RoomResponse:
        """
        Create a room.

        Calls POST /api/v1/rooms. Room names are unique server-side; a
        duplicate is reported as a CONFLICT error.

        Raises:
            BookingApiError: On transport, HTTP or parsing failure.
        """
        data = await self._request("POST", ROOMS_PATH, json=request.to_json())
        return self._parse(RoomResponse, data)

    async def get_room(self, room_id: int) -> RoomResponse:
        """
        Get a room by ID.

        Calls GET /api/v1/rooms/{id}.

        Raises:
            BookingApiError: NOT_FOUND for unknown IDs, or other failures.
        """
        data = await self._request("GET", f"{ROOMS_PATH}/{room_id}")
        return self._parse(RoomResponse, data)

    async def create_booking(self, request: CreateBookingRequest) -> BookingResponse:
        """
        Create a booking, initially PENDING.

        Calls POST /api/v1/bookings.

        Raises:
            BookingApiError: CONFLICT when the slot overlaps an active booking,
                or other failures.
        """
        data = await self._request("POST", BOOKINGS_PATH, json=request.to_json())
        return self._parse(BookingResponse, data)

    async def confirm_booking(self, booking_id: int) -> BookingResponse:
        """
        Confirm a PENDING booking.

        Calls POST /api/v1/bookings/{id}/confirm.
        """
        data = await self._request("POST", f"{BOOKINGS_PATH}/{booking_id}/confirm")
        return self._parse(BookingResponse, data)

    async def cancel_booking(self, booking_id: int) -> BookingResponse:
        """
        Cancel a PENDING or CONFIRMED booking.

        Calls POST /api/v1/bookings/{id}/cancel.
        """
        data = await self._request("POST", f"{BOOKINGS_PATH}/{booking_id}/cancel")
        return self._parse(BookingResponse, data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and return the decoded JSON body.

        Converts every failure into BookingApiError with a classified kind.
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise BookingApiError(
                str(e) or type(e).__name__, kind=ErrorKind.NETWORK
            ) from e

        if response.is_error:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise BookingApiError(
                f"Invalid JSON in response to {method} {path}",
                kind=ErrorKind.INVALID_RESPONSE,
                status_code=response.status_code,
            ) from e

    def _error_from_response(self, response: httpx.Response) -> BookingApiError:
        """
        Build an error from a 4xx/5xx response.

        Prefers the message from the service's error body and falls back on
        the HTTP reason phrase when the body is missing or not an ErrorResponse.
        """
        kind = ErrorKind.from_status(response.status_code)
        try:
            body = ErrorResponse.model_validate(response.json())
        except (ValueError, pydantic.ValidationError):
            reason = response.reason_phrase or f"HTTP {response.status_code}"
            return BookingApiError(reason, kind=kind, status_code=response.status_code)

        return BookingApiError(
            body.message,
            kind=kind,
            status_code=response.status_code,
            error_code=body.error_code,
        )

    def _parse(self, model: type[pydantic.BaseModel], data: Any) -> Any:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise BookingApiError(
                f"Unexpected {model.__name__} payload: {e.error_count()} validation error(s)",
                kind=ErrorKind.INVALID_RESPONSE,
            ) from e

    def _parse_list(self, model: type[pydantic.BaseModel], data: Any) -> list[Any]:
        if not isinstance(data, list):
            raise BookingApiError(
                f"Expected a list of {model.__name__}, got {type(data).__name__}",
                kind=ErrorKind.INVALID_RESPONSE,
            )
        return [self._parse(model, item) for item in data]
