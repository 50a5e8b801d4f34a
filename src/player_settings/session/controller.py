"""Session state for the signed-in user."""

from dataclasses import dataclass
from typing import Callable, Optional
import logging

from ..core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    """An authenticated user."""

    user_id: str
    username: str
    token: Optional[str] = None


class SessionController:
    """Tracks the current user and broadcasts session changes.

    Subscribers receive a SESSION_CHANGED event on every login and logout and
    query the controller for the identity at the time they handle it.
    """

    def __init__(self, user: Optional[User] = None):
        self._user = user
        self._events = EventBus()

    @property
    def user(self) -> Optional[User]:
        """Get the signed-in user, or None when anonymous."""
        return self._user

    @property
    def is_authenticated(self) -> bool:
        """Check if a user is signed in."""
        return self._user is not None

    def subscribe(self, callback: Callable[[Event], None]) -> Callable[[], None]:
        """Subscribe to session changes.

        Args:
            callback: Function called with each SESSION_CHANGED event

        Returns:
            A function that removes the subscription
        """
        return self._events.subscribe(EventType.SESSION_CHANGED, callback)

    @property
    def subscriber_count(self) -> int:
        return self._events.subscriber_count(EventType.SESSION_CHANGED)

    def login(self, user: User) -> None:
        """Sign a user in and notify subscribers.

        Args:
            user: The authenticated user
        """
        self._user = user
        logger.info(f"User signed in: {user.username}")
        self._events.publish(Event(EventType.SESSION_CHANGED, user))

    def logout(self) -> None:
        """Sign the current user out and notify subscribers."""
        if self._user is not None:
            logger.info(f"User signed out: {self._user.username}")
        self._user = None
        self._events.publish(Event(EventType.SESSION_CHANGED, None))
