import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

MAX_NOTIFICATIONS = 50


@dataclass(eq=False)
class User:
    """
    A session-bound identity that owns links.

    owned_links only holds short codes for display; the link registry owns
    the links themselves. The notification inbox is an ordered set capped
    at MAX_NOTIFICATIONS entries, dropping the oldest first.
    """

    session_token: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _owned_links: List[str] = field(default_factory=list, repr=False)
    _notifications: "OrderedDict[str, None]" = field(default_factory=OrderedDict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def owned_links(self) -> List[str]:
        with self._lock:
            return list(self._owned_links)

    @property
    def notifications(self) -> List[str]:
        with self._lock:
            return list(self._notifications)

    def add_link(self, short_code: str) -> None:
        with self._lock:
            if short_code not in self._owned_links:
                self._owned_links.append(short_code)

    def remove_link(self, short_code: str) -> bool:
        with self._lock:
            try:
                self._owned_links.remove(short_code)
            except ValueError:
                return False
            return True

    def owns_link(self, short_code: str) -> bool:
        with self._lock:
            return short_code in self._owned_links

    def add_notification(self, message: str) -> None:
        with self._lock:
            if message in self._notifications:
                return
            self._notifications[message] = None
            while len(self._notifications) > MAX_NOTIFICATIONS:
                self._notifications.popitem(last=False)
