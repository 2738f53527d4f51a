"""
Factory for creating notification sinks.
"""

from enum import Enum

from shortlinks.notifications.strategies import (
    LoggingNotifier,
    NotificationStrategy,
    NullNotifier,
    UserInboxNotifier,
)
from shortlinks.storage.link_registry import Clock, utc_now
from shortlinks.storage.user_registry import UserRegistry


class NotificationBackend(Enum):
    """Available notification backends"""
    INBOX = "inbox"
    LOG = "log"
    NULL = "null"


class NotificationFactory:
    """
    Simple factory for notification sinks.

    Instances are not cached here: the application container builds one
    and passes it to whoever needs it.
    """

    @classmethod
    def create(
        cls,
        backend: NotificationBackend,
        user_registry: UserRegistry,
        enabled: bool = True,
        clock: Clock = utc_now,
    ) -> NotificationStrategy:
        """
        Args:
            backend: Type of notification backend (from enum)
            user_registry: Needed by the inbox backend to find owners
            enabled: When False a NullNotifier is returned regardless of backend
            clock: Timestamp source for inbox entries

        Raises:
            ValueError: If backend is unknown
        """
        if not enabled or backend == NotificationBackend.NULL:
            return NullNotifier()
        if backend == NotificationBackend.INBOX:
            return UserInboxNotifier(user_registry, clock=clock)
        if backend == NotificationBackend.LOG:
            return LoggingNotifier()
        raise ValueError(f"Unknown notification backend: {backend}")
