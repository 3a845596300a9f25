"""careplan — itinerary modeling, duration estimation and session notes for childcare bookings."""

import logging

from careplan import config


def configure_logging(level: str | None = None) -> None:
    """Apply config.LOG_LEVEL (or level) to the careplan logger hierarchy."""
    logging.getLogger("careplan").setLevel((level or config.LOG_LEVEL).upper())


__all__ = ["config", "configure_logging"]
