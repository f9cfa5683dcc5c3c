"""Booking demo CLI.

This module provides the CLI for running the booking API demo:
- run: Walk the API client through the six demo calls

Option values fall back to Settings, which read BOOKING_DEMO_* environment
variables. With no options the demo behaves like the original script:
localhost service, one second between steps, calls not awaited.
"""

import asyncio
import logging
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from booking_demo.client import BookingApiClient
from booking_demo.config import Settings
from booking_demo.runner import DemoRunner

app = typer.Typer(
    name="booking-demo",
    help="Demonstrate the room booking API client",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command("run")
def run_demo(
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-u", help="Booking service URL (e.g., http://localhost:8080)"
    ),
    delay: Optional[float] = typer.Option(
        None, "--delay", "-d", help="Pause between steps in seconds"
    ),
    sequential: Optional[bool] = typer.Option(
        None,
        "--sequential/--paced",
        help="Wait for each call to finish before pausing (default: paced)",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="HTTP request timeout in seconds"
    ),
    room_id: Optional[int] = typer.Option(
        None, "--room-id", help="Room used by the fetch and booking steps"
    ),
) -> None:
    """
    Run the booking API demo.

    Lists rooms, creates a room, fetches a room, then creates, confirms and
    cancels a booking. Failed calls are printed and the demo continues;
    the command always exits 0 once the closing banner is printed.
    """
    settings = Settings()
    overrides = {
        "base_url": base_url,
        "step_delay": delay,
        "sequential": sequential,
        "request_timeout": timeout,
        "fixed_room_id": room_id,
    }
    settings = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    console = Console()

    async def _run() -> None:
        async with httpx.AsyncClient(
            base_url=settings.base_url, timeout=settings.request_timeout
        ) as http:
            runner = DemoRunner(
                client=BookingApiClient(http=http),
                console=console,
                step_delay=settings.step_delay,
                sequential=settings.sequential,
                fixed_room_id=settings.fixed_room_id,
            )
            await runner.run()
            await runner.drain()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Demo interrupted[/yellow]")
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
