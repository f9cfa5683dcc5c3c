"""
Main entry point for the booking demo package.

Allows invoking the demo via:
    python -m booking_demo run
    python -m booking_demo run --base-url http://localhost:8080 --sequential
"""

from booking_demo.cli import main

if __name__ == "__main__":
    main()
