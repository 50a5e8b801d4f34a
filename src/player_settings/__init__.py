"""Player Settings - typed, observable user preferences for the course player."""

__version__ = "1.0.0"
