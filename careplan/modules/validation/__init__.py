"""modules/validation — Itinerary completeness and section disclosure."""
