"""Environment-based configuration for the booking API demo."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Booking demo configuration.

    All settings can be overridden via environment variables with
    BOOKING_DEMO_ prefix. For example:
        BOOKING_DEMO_BASE_URL=http://booking:8080
        BOOKING_DEMO_STEP_DELAY=0.5
    """

    # Booking service
    base_url: str = "http://localhost:8080"
    request_timeout: float = 10.0

    # Demo pacing
    step_delay: float = 1.0  # seconds between steps
    sequential: bool = False  # wait for each call before pausing

    # Room used by the fetch and booking steps
    fixed_room_id: int = 1

    model_config = {"env_prefix": "BOOKING_DEMO_"}
