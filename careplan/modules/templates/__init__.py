"""modules/templates — Segment templates per booking mode."""
