"""modules/store — Itinerary data store."""
