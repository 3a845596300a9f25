"""modules — itinerary engine services."""
