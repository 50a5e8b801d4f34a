"""Session tracking."""

from .controller import SessionController, User

__all__ = ["SessionController", "User"]
