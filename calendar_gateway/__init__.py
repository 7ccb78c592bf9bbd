"""Calendar gateway: create Google and Microsoft calendar events over OAuth 2.0."""

__version__ = "1.0.0"
