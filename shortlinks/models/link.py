import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class LinkState(str, Enum):
    """Observable lifecycle state of a link"""
    ACTIVE = "active"
    EXPIRED = "expired"
    LIMIT_EXCEEDED = "limit_exceeded"
    REMOVED = "removed"


class ClickOutcome(Enum):
    """Result of one resolution attempt against a record"""
    ALLOWED = "allowed"
    EXPIRED = "expired"
    LIMIT_EXCEEDED = "limit_exceeded"


@dataclass(eq=False)
class LinkRecord:
    """
    One short link: the URL, its owner, quota, counters and timestamps.

    Immutable after creation: id, original_url, short_code, owner_id,
    created_at, expires_at.
    Mutable, and only while holding `lock`: click_limit, clicks_count,
    active, removed.

    The registry owns the record and its lifecycle; everyone else holds
    references for reading.
    """

    original_url: str
    short_code: str
    owner_id: str
    click_limit: int
    created_at: datetime
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    clicks_count: int = 0
    active: bool = True
    removed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def new(
        cls,
        original_url: str,
        short_code: str,
        owner_id: str,
        click_limit: int,
        ttl: timedelta,
        now: datetime,
    ) -> "LinkRecord":
        return cls(
            original_url=original_url,
            short_code=short_code,
            owner_id=owner_id,
            click_limit=click_limit,
            created_at=now,
            expires_at=now + ttl,
        )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def register_click(self, now: datetime) -> ClickOutcome:
        """
        Count one resolution attempt. Caller must hold `lock`.

        The click that brings clicks_count up to click_limit is still
        allowed; the record only turns inactive on the attempt after that,
        and the counter stays at the limit.
        """
        if not self.active:
            if self.is_expired(now):
                return ClickOutcome.EXPIRED
            return ClickOutcome.LIMIT_EXCEEDED

        if self.is_expired(now):
            self.active = False
            return ClickOutcome.EXPIRED

        if self.clicks_count >= self.click_limit:
            self.active = False
            return ClickOutcome.LIMIT_EXCEEDED

        self.clicks_count += 1
        return ClickOutcome.ALLOWED

    def change_click_limit(self, new_limit: int, now: datetime) -> None:
        """
        Set a new quota. Caller must hold `lock`.

        Lowering the limit to or below the current count deactivates the
        link; raising it above the count reactivates an inactive link that
        has not expired.
        """
        self.click_limit = new_limit
        if self.clicks_count >= new_limit:
            self.active = False
        elif not self.active and not self.is_expired(now):
            self.active = True

    def state(self, now: datetime) -> LinkState:
        if self.removed:
            return LinkState.REMOVED
        if self.is_expired(now):
            return LinkState.EXPIRED
        if not self.active:
            return LinkState.LIMIT_EXCEEDED
        return LinkState.ACTIVE

    def __str__(self) -> str:
        return (
            f"LinkRecord(code={self.short_code!r}, url={self.original_url!r}, "
            f"clicks={self.clicks_count}/{self.click_limit}, "
            f"expires={self.expires_at.isoformat()})"
        )
