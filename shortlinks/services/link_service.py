import logging
from typing import List, Optional

from shortlinks.exceptions import LimitExceededError, LinkExpiredError
from shortlinks.models.link import LinkRecord
from shortlinks.notifications import messages
from shortlinks.notifications.strategies import NotificationStrategy
from shortlinks.storage.link_registry import LinkRegistry
from shortlinks.storage.user_registry import UserRegistry

logger = logging.getLogger(__name__)


class LinkService:
    """
    Link service with dependency injection for registry, users and notifier.

    The registry enforces the link invariants; this layer adds what callers
    expect around it:
    - owner notifications for expired, exhausted and updated links
    - the owner's list of short codes kept in step with the registry
    - full short URLs built from the configured base URL
    """

    def __init__(
        self,
        registry: LinkRegistry,
        users: UserRegistry,
        notifier: NotificationStrategy,
        base_url: str = "http://localhost:8000",
    ):
        """
        Args:
            registry: Link registry (owns all links)
            users: User registry, for back-references
            notifier: Where owner notifications go
            base_url: Prefix for full short URLs
        """
        self.registry = registry
        self.users = users
        self.notifier = notifier
        self.base_url = base_url.rstrip("/")

    def create_link(self, url: str, owner_id: str, click_limit: Optional[int] = None) -> LinkRecord:
        """
        Create a short link, reusing the owner's existing one for the same URL.

        Raises:
            InvalidUrlError, GenerationExhaustedError: from the registry
        """
        link = self.registry.create(url, owner_id, click_limit)
        user = self.users.find_by_id(owner_id)
        if user is not None:
            user.add_link(link.short_code)
        return link

    def resolve(self, short_code: str) -> str:
        """
        Resolve a short code to its URL, counting the click.

        Failed attempts on expired or exhausted links notify the owner
        before the error propagates.
        """
        try:
            return self.registry.resolve(short_code)
        except LinkExpiredError as e:
            if e.link is not None:
                self._notify(e.link, messages.expired_message(e.link))
            raise
        except LimitExceededError as e:
            if e.link is not None:
                self._notify(e.link, messages.limit_exceeded_message(e.link))
            raise

    def get_link(self, short_code: str, owner_id: str) -> LinkRecord:
        return self.registry.get(short_code, owner_id)

    def list_links(self, owner_id: str) -> List[LinkRecord]:
        return self.registry.list_by_owner(owner_id)

    def update_click_limit(self, short_code: str, owner_id: str, new_limit: int) -> LinkRecord:
        link = self.registry.update_click_limit(short_code, owner_id, new_limit)
        self._notify(link, messages.updated_message(link, f"click limit changed to {new_limit}"))
        return link

    def delete_link(self, short_code: str, owner_id: str) -> bool:
        deleted = self.registry.delete(short_code, owner_id)
        if deleted:
            self._forget(owner_id, short_code)
        return deleted

    def purge_expired(self) -> List[LinkRecord]:
        """Remove expired links from the registry and from owners' lists."""
        removed = self.registry.sweep_expired()
        for link in removed:
            self._forget(link.owner_id, link.short_code)
        return removed

    def notify_expired(self, link: LinkRecord) -> None:
        """Tell the owner a link expired. Errors propagate to the caller."""
        self.notifier.notify(link.owner_id, link, messages.expired_message(link))

    def short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def _notify(self, link: LinkRecord, message: str) -> None:
        try:
            self.notifier.notify(link.owner_id, link, message)
        except Exception:
            logger.exception("Failed to notify owner of %s", link.short_code)

    def _forget(self, owner_id: str, short_code: str) -> None:
        user = self.users.find_by_id(owner_id)
        if user is not None:
            user.remove_link(short_code)
