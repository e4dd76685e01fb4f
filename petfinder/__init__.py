"""Pet Finder: lost and found pet announcements for a city."""

__version__ = "1.0.0"
