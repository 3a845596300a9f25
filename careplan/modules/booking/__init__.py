"""modules/booking — Booking session flow."""

from careplan.modules.booking.booking_session import BookingSession, IncompleteItineraryError

__all__ = ["BookingSession", "IncompleteItineraryError"]
