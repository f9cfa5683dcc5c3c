"""
Demo of the room booking API client.

This package walks a booking service client through a fixed sequence of
calls (list rooms, create room, fetch room, create/confirm/cancel booking)
and prints a console transcript of the results.

Run via: python -m booking_demo run
"""

from booking_demo.client import ApiClientProtocol, BookingApiClient
from booking_demo.errors import BookingApiError, ErrorKind
from booking_demo.runner import DemoRunner
from booking_demo.types import (
    BookingResponse,
    BookingStatus,
    CreateBookingRequest,
    CreateRoomRequest,
    DemoContext,
    RoomFilter,
    RoomResponse,
)

__all__ = [
    "ApiClientProtocol",
    "BookingApiClient",
    "BookingApiError",
    "BookingResponse",
    "BookingStatus",
    "CreateBookingRequest",
    "CreateRoomRequest",
    "DemoContext",
    "DemoRunner",
    "ErrorKind",
    "RoomFilter",
    "RoomResponse",
]
