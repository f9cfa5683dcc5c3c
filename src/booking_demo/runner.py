"""
Demo runner for the room booking API client.

This module provides a DemoRunner class that walks a booking API client
through a fixed sequence of six calls and prints a console transcript:

1. List rooms (including inactive ones)
2. Create a room with a timestamped name
3. Fetch a room by a fixed ID
4. Create a booking one to two hours from now
5. Confirm that booking
6. Cancel that booking

Each call is dispatched as a task whose completion (error or result) is
printed by a done callback. By default the runner does not wait for the
call: it starts the fixed pause right away, so a slow call may print after
the next step's announcement. Pass sequential=True to wait for each call
before pausing. drain() waits for calls still running after run()
returns.

A failed call never stops the sequence. Its message is printed in place of
the step's result and the runner moves on.
"""

import asyncio
import logging
import time
from collections.abc import Coroutine
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, TypeVar

from rich.console import Console

from booking_demo.client import ApiClientProtocol
from booking_demo.types import (
    BookingResponse,
    CreateBookingRequest,
    CreateRoomRequest,
    DemoContext,
    RoomFilter,
    RoomResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

OPENING_BANNER = "=== ДЕМОНСТРАЦИЯ API КЛИЕНТА ==="
CLOSING_BANNER = "=== ДЕМОНСТРАЦИЯ ЗАВЕРШЕНА ==="

ROOM_NAME_PREFIX = "Тестовая-"
ROOM_CAPACITY = 8
ROOM_DESCRIPTION = "Создана через Python клиент"

BOOKING_TITLE = "Тестовое совещание"
BOOKING_ORGANIZER = "test@example.com"
BOOKING_START_OFFSET = timedelta(hours=1)
BOOKING_END_OFFSET = timedelta(hours=2)

INDENT = "   "


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(error: BaseException) -> str:
    """Human-readable message for a failed call."""
    message = getattr(error, "message", None) or str(error)
    return message or type(error).__name__


class DemoRunner:
    """
    Runs the six-step booking API demo against an injected client.

    Cross-step state lives in a DemoContext that is reset at the start of
    every run(): the created room ID (step 2) and the created booking ID
    (step 4, required by steps 5 and 6).

    Each *_step() method announces itself, dispatches one client call and
    returns the dispatched task, or None when the step was skipped. They can
    be awaited individually; run() chains them with the configured pause.
    """

    def __init__(
        self,
        client: ApiClientProtocol,
        console: Console | None = None,
        step_delay: float = 1.0,
        sequential: bool = False,
        fixed_room_id: int = 1,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize demo runner.

        Args:
            client: Booking API client the steps call into
            console: Output sink for the transcript (default: stdout Console)
            step_delay: Pause in seconds after every step
            sequential: If True, wait for each call to complete before pausing
            fixed_room_id: Room used by the fetch and booking steps
            clock: Source of the current UTC time for names and booking slots
        """
        self.client = client
        self.console = console or Console()
        self.step_delay = step_delay
        self.sequential = sequential
        self.fixed_room_id = fixed_room_id
        self.clock = clock

        self.context = DemoContext()
        self._pending: set[asyncio.Task[Any]] = set()

    def _print(self, text: str = "") -> None:
        # Server data (room names, messages) must not be parsed as rich markup
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def _print_error(self, error: BaseException) -> None:
        logger.debug(f"Call failed ({getattr(error, 'kind', type(error).__name__)}): {error!r}")
        self._print(f"{INDENT}Ошибка: {_error_message(error)}")

    def _dispatch(
        self,
        call: Coroutine[Any, Any, T],
        on_complete: Callable[[BaseException | None, T | None], None],
    ) -> asyncio.Task[T]:
        """
        Start a client call without waiting for it.

        on_complete receives (error, None) or (None, result) once the call
        finishes. It is not invoked if the task is cancelled.
        """
        task = asyncio.create_task(call)

        def _done(finished: asyncio.Task[T]) -> None:
            if finished.cancelled():
                logger.debug("Call cancelled before completion")
                return
            error = finished.exception()
            if error is not None:
                on_complete(error, None)
            else:
                on_complete(None, finished.result())

        task.add_done_callback(_done)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    async def list_rooms_step(self) -> asyncio.Task[list[RoomResponse]]:
        """Step 1: list all rooms, including inactive ones."""
        self._print("1. Получаем все комнаты...")

        def on_complete(error: BaseException | None, rooms: list[RoomResponse] | None) -> None:
            if error is not None:
                self._print_error(error)
            else:
                rooms = rooms or []
                self._print(f"{INDENT}Найдено комнат: {len(rooms)}")
                for room in rooms:
                    self._print(
                        f"{INDENT}- ID:{room.id} | {room.name} | Вместимость: {room.capacity}"
                    )
            self._print()

        return self._dispatch(
            self.client.list_rooms(RoomFilter(active_only=False)), on_complete
        )

    async def create_room_step(self) -> asyncio.Task[RoomResponse]:
        """
        Step 2: create a room.

        The name carries the current time in milliseconds so repeated runs
        do not collide on the service's unique room name.
        """
        self._print("2. Создаём новую комнату...")

        millis = int(self.clock().timestamp() * 1000)
        request = CreateRoomRequest(
            name=f"{ROOM_NAME_PREFIX}{millis}",
            capacity=ROOM_CAPACITY,
            description=ROOM_DESCRIPTION,
        )

        def on_complete(error: BaseException | None, room: RoomResponse | None) -> None:
            if error is not None:
                self._print_error(error)
            elif room is not None:
                self._print(f"{INDENT}Создана комната:")
                self._print(f"{INDENT}- ID: {room.id}")
                self._print(f"{INDENT}- Название: {room.name}")
                self.context.created_room_id = room.id
            self._print()

        return self._dispatch(self.client.create_room(request), on_complete)

    async def get_room_step(self) -> asyncio.Task[RoomResponse]:
        """Step 3: fetch the fixed room (not the one created in step 2)."""
        room_id = self.fixed_room_id
        self._print(f"3. Получаем комнату по ID={room_id}...")

        def on_complete(error: BaseException | None, room: RoomResponse | None) -> None:
            if error is not None:
                self._print_error(error)
            elif room is not None:
                self._print(f"{INDENT}Комната: {room.name}")
                self._print(f"{INDENT}Описание: {room.description}")
            self._print()

        return self._dispatch(self.client.get_room(room_id), on_complete)

    async def create_booking_step(self) -> asyncio.Task[BookingResponse]:
        """Step 4: book the fixed room from now+1h to now+2h."""
        self._print("4. Создаём бронирование...")

        now = self.clock()
        request = CreateBookingRequest(
            room_id=self.fixed_room_id,
            title=BOOKING_TITLE,
            organizer_email=BOOKING_ORGANIZER,
            start_time=now + BOOKING_START_OFFSET,
            end_time=now + BOOKING_END_OFFSET,
        )

        def on_complete(error: BaseException | None, booking: BookingResponse | None) -> None:
            if error is not None:
                self._print_error(error)
            elif booking is not None:
                self._print(f"{INDENT}Создано бронирование:")
                self._print(f"{INDENT}- ID: {booking.id}")
                self._print(f"{INDENT}- Комната: {booking.room_name}")
                self._print(f"{INDENT}- Статус: {booking.status}")
                self.context.created_booking_id = booking.id
            self._print()

        return self._dispatch(self.client.create_booking(request), on_complete)

    async def confirm_booking_step(self) -> asyncio.Task[BookingResponse] | None:
        """Step 5: confirm the booking from step 4, if one was captured."""
        self._print("5. Подтверждаем бронирование...")

        booking_id = self.context.created_booking_id
        if booking_id is None:
            logger.debug("No booking captured, skipping confirm")
            return None

        def on_complete(error: BaseException | None, booking: BookingResponse | None) -> None:
            if error is not None:
                self._print_error(error)
            elif booking is not None:
                self._print(f"{INDENT}Бронирование подтверждено:")
                self._print(f"{INDENT}- Статус: {booking.status}")
            self._print()

        return self._dispatch(self.client.confirm_booking(booking_id), on_complete)

    async def cancel_booking_step(self) -> asyncio.Task[BookingResponse] | None:
        """Step 6: cancel the booking from step 4, if one was captured."""
        self._print("6. Отменяем бронирование...")

        booking_id = self.context.created_booking_id
        if booking_id is None:
            logger.debug("No booking captured, skipping cancel")
            return None

        def on_complete(error: BaseException | None, booking: BookingResponse | None) -> None:
            if error is not None:
                self._print_error(error)
            elif booking is not None:
                self._print(f"{INDENT}Бронирование отменено:")
                self._print(f"{INDENT}- Статус: {booking.status}")
            self._print()

        return self._dispatch(self.client.cancel_booking(booking_id), on_complete)

    # -------------------------------------------------------------------------
    # Sequence
    # -------------------------------------------------------------------------

    async def run(self) -> None:
        """
        Run the demo.

        Prints the opening banner, runs the six steps in order with
        step_delay seconds after each, then prints the closing banner.
        Client failures are printed, never raised.
        """
        self.context = DemoContext()
        started = time.monotonic()

        self.console.print(OPENING_BANNER, style="bold", markup=False, highlight=False)
        self._print()

        steps = [
            self.list_rooms_step,
            self.create_room_step,
            self.get_room_step,
            self.create_booking_step,
            self.confirm_booking_step,
            self.cancel_booking_step,
        ]
        for step in steps:
            task = await step()
            if self.sequential and task is not None:
                # asyncio.wait does not re-raise; the done callback reports errors
                await asyncio.wait([task])
            await asyncio.sleep(self.step_delay)

        if self._pending:
            logger.debug(f"{len(self._pending)} call(s) still in flight at end of demo")

        self.console.print(CLOSING_BANNER, style="bold", markup=False, highlight=False)
        logger.debug(f"Demo finished in {time.monotonic() - started:.2f}s")

    async def drain(self) -> None:
        """
        Wait for calls still in flight after run() returned.

        Their results print after the closing banner. Call this before
        closing the client the steps use.
        """
        if not self._pending:
            return
        logger.debug(f"Draining {len(self._pending)} call(s)")
        # Failures were already reported by the done callbacks
        await asyncio.gather(*self._pending, return_exceptions=True)
