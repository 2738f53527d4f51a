"""
Notification module for link lifecycle events.
Implements Strategy Pattern for pluggable delivery targets.
"""

from .strategies import NotificationStrategy, UserInboxNotifier, LoggingNotifier, NullNotifier
from .factory import NotificationFactory, NotificationBackend

__all__ = [
    "NotificationStrategy",
    "UserInboxNotifier",
    "LoggingNotifier",
    "NullNotifier",
    "NotificationFactory",
    "NotificationBackend",
]
