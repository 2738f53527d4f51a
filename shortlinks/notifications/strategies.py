"""
Notification strategies using Strategy Pattern.
Allows switching between delivery targets (user inbox, log, nothing).
"""

import logging
from abc import ABC, abstractmethod

from shortlinks.models.link import LinkRecord
from shortlinks.notifications.messages import TIMESTAMP_FORMAT
from shortlinks.storage.link_registry import Clock, utc_now
from shortlinks.storage.user_registry import UserRegistry

logger = logging.getLogger(__name__)


class NotificationStrategy(ABC):
    """
    Abstract base class for notification sinks.

    The link service and the sweeper emit (owner_id, link, message) and do
    not care where it ends up. Delivery is synchronous and in-memory.
    """

    @abstractmethod
    def notify(self, owner_id: str, link: LinkRecord, message: str) -> None:
        """
        Deliver one human-readable message about a link to its owner.

        Args:
            owner_id: Identity of the link owner
            link: The link the message is about
            message: Ready-to-display text
        """
        pass


class UserInboxNotifier(NotificationStrategy):
    """
    Stores messages in the owner's bounded notification inbox.

    Messages for owners unknown to the user registry are dropped. Entries
    are stamped with the same clock the link registry uses.
    """

    def __init__(self, user_registry: UserRegistry, clock: Clock = utc_now):
        self.user_registry = user_registry
        self.clock = clock

    def notify(self, owner_id: str, link: LinkRecord, message: str) -> None:
        user = self.user_registry.find_by_id(owner_id)
        if user is None:
            logger.debug("No user %s for notification about %s", owner_id, link.short_code)
            return

        stamp = self.clock().strftime(TIMESTAMP_FORMAT)
        user.add_notification(f"{stamp} - {message}")
        logger.info("Notification for user %s: %s", owner_id, message)


class LoggingNotifier(NotificationStrategy):
    """Writes notifications to the application log only."""

    def notify(self, owner_id: str, link: LinkRecord, message: str) -> None:
        logger.info(
            "Notification for user %s: %s",
            owner_id,
            message,
            extra={"short_code": link.short_code},
        )


class NullNotifier(NotificationStrategy):
    """
    Null Object Pattern - notifier that does nothing.

    Used when notifications are disabled and in tests.
    """

    def notify(self, owner_id: str, link: LinkRecord, message: str) -> None:
        pass
