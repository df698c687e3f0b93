"""Travel Desk: staff-side activity search and consultation assistant."""

__version__ = "0.1.0"
