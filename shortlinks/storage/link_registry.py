"""
In-memory registry of short links.

The registry keeps three indices that always move together:

- by code:        short_code -> LinkRecord
- by owner + url: (owner_id, original_url) -> short_code
- by owner:       owner_id -> [short_code, ...] in creation order

Locking:
- Index mutations run under one index lock. On insert the by-code entry is
  published last; on removal it is retracted first. A reader that only
  looks at the by-code index (resolve) therefore never needs the index lock
  and never sees a link missing from the owner indices.
- Per-link mutations run under the record's own lock, so clicks on one code
  never wait for another code.
- Lock order is record -> index -> generator.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from shortlinks.exceptions import (
    AccessDeniedError,
    InvalidClickLimitError,
    InvalidUrlError,
    LimitExceededError,
    LinkExpiredError,
    LinkNotFoundError,
)
from shortlinks.models.link import ClickOutcome, LinkRecord
from shortlinks.services.short_code_generator import ShortCodeGenerator
from shortlinks.utils.validators import is_valid_url, normalize_url

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LinkRegistry:
    """
    Concurrent store of link records with atomic per-link operations.

    Similar in role to the storage strategies of the service layer, but the
    registry is the single owner of every LinkRecord: it creates them,
    mutates them and destroys them.
    """

    def __init__(
        self,
        generator: ShortCodeGenerator,
        code_length: int = 8,
        ttl: timedelta = timedelta(hours=24),
        default_click_limit: int = 10,
        clock: Clock = utc_now,
    ):
        """
        Args:
            generator: Source of unique short codes (shared, thread safe)
            code_length: Length of generated codes
            ttl: Lifetime of a new link
            default_click_limit: Quota used when the caller gives none
            clock: Returns the current aware datetime; injectable for tests
        """
        if default_click_limit < 1:
            raise InvalidClickLimitError(default_click_limit)

        self.generator = generator
        self.code_length = code_length
        self.ttl = ttl
        self.default_click_limit = default_click_limit
        self.clock = clock

        self._by_code: Dict[str, LinkRecord] = {}
        self._by_owner_url: Dict[Tuple[str, str], str] = {}
        self._by_owner: Dict[str, List[str]] = {}
        self._index_lock = threading.Lock()

    def create(
        self,
        url: str,
        owner_id: str,
        click_limit: Optional[int] = None,
    ) -> LinkRecord:
        """
        Create a short link, or return the owner's existing link for the URL.

        Args:
            url: Target URL; a missing scheme is normalized to https://
            owner_id: Opaque identity of the creator
            click_limit: Quota; anything not > 0 falls back to the default

        Raises:
            InvalidUrlError: if the normalized URL fails validation
            GenerationExhaustedError: if no free code could be found
        """
        original_url = normalize_url(url)
        if not is_valid_url(original_url):
            raise InvalidUrlError(url)

        limit = click_limit if click_limit and click_limit > 0 else self.default_click_limit
        key = (owner_id, original_url)

        with self._index_lock:
            existing_code = self._by_owner_url.get(key)
            if existing_code is not None:
                existing = self._by_code.get(existing_code)
                if existing is not None and not existing.removed:
                    return existing

            # Generated under the index lock so two creates for the same owner+URL
            # cannot both miss the lookup above and mint two codes
            short_code = self.generator.generate(self.code_length)
            link = LinkRecord.new(
                original_url=original_url,
                short_code=short_code,
                owner_id=owner_id,
                click_limit=limit,
                ttl=self.ttl,
                now=self.clock(),
            )
            self._by_owner_url[key] = short_code
            self._by_owner.setdefault(owner_id, []).append(short_code)
            self._by_code[short_code] = link

        logger.info("Created short link %s -> %s", short_code, original_url)
        return link

    def resolve(self, short_code: str) -> str:
        """
        Count a click and return the target URL.

        Raises:
            LinkNotFoundError: unknown or removed code
            LinkExpiredError: the link outlived its TTL
            LimitExceededError: the quota was already used up
        """
        link = self._by_code.get(short_code)
        if link is None:
            raise LinkNotFoundError(short_code)

        with link.lock:
            if link.removed:
                raise LinkNotFoundError(short_code)
            outcome = link.register_click(self.clock())

        if outcome is ClickOutcome.EXPIRED:
            raise LinkExpiredError(short_code, link)
        if outcome is ClickOutcome.LIMIT_EXCEEDED:
            raise LimitExceededError(short_code, link)
        return link.original_url

    def find(self, short_code: str) -> Optional[LinkRecord]:
        """Look up a live link without an ownership check."""
        link = self._by_code.get(short_code)
        if link is None or link.removed:
            return None
        return link

    def get(self, short_code: str, owner_id: str) -> LinkRecord:
        """
        Raises:
            LinkNotFoundError: unknown or removed code
            AccessDeniedError: owner_id does not own the link
        """
        link = self.find(short_code)
        if link is None:
            raise LinkNotFoundError(short_code)
        if link.owner_id != owner_id:
            raise AccessDeniedError(short_code)
        return link

    def update_click_limit(self, short_code: str, owner_id: str, new_limit: int) -> LinkRecord:
        """
        Change the quota of an owned link, deactivating or reactivating it.

        Raises:
            InvalidClickLimitError: new_limit is not a positive integer
            LinkNotFoundError, AccessDeniedError: as for get()
        """
        if isinstance(new_limit, bool) or not isinstance(new_limit, int) or new_limit < 1:
            raise InvalidClickLimitError(new_limit)

        link = self.get(short_code, owner_id)
        with link.lock:
            if link.removed:
                raise LinkNotFoundError(short_code)
            link.change_click_limit(new_limit, self.clock())

        logger.info("Click limit of %s changed to %d", short_code, new_limit)
        return link

    def delete(self, short_code: str, owner_id: str) -> bool:
        """
        Remove an owned link and release its code.

        Returns:
            True if removed, False if the code is unknown or not owned
        """
        link = self._by_code.get(short_code)
        if link is None:
            return False

        with link.lock:
            if link.removed or link.owner_id != owner_id:
                return False
            self._remove_locked(link)

        logger.info("Deleted short link %s", short_code)
        return True

    def list_by_owner(self, owner_id: str) -> List[LinkRecord]:
        """Owner's live links in creation order."""
        with self._index_lock:
            codes = list(self._by_owner.get(owner_id, ()))
            links = [self._by_code.get(code) for code in codes]
        return [link for link in links if link is not None and not link.removed]

    def sweep_expired(self) -> List[LinkRecord]:
        """
        Remove every expired link and release its code.

        Works on a snapshot of the by-code index; links removed concurrently
        by someone else are skipped. Links created during the sweep may or
        may not be considered.

        Returns:
            The removed records, for downstream notification
        """
        now = self.clock()
        with self._index_lock:
            candidates = list(self._by_code.values())

        removed = []
        for link in candidates:
            with link.lock:
                if link.removed or not link.is_expired(now):
                    continue
                link.active = False
                self._remove_locked(link)
            removed.append(link)

        if removed:
            logger.info("Swept %d expired links", len(removed))
        return removed

    def __len__(self) -> int:
        return len(self._by_code)

    def _remove_locked(self, link: LinkRecord) -> None:
        """Detach a link from all indices. Caller holds link.lock."""
        link.removed = True
        code = link.short_code
        key = (link.owner_id, link.original_url)

        with self._index_lock:
            self._by_code.pop(code, None)
            if self._by_owner_url.get(key) == code:
                del self._by_owner_url[key]
            owner_codes = self._by_owner.get(link.owner_id)
            if owner_codes is not None:
                if code in owner_codes:
                    owner_codes.remove(code)
                if not owner_codes:
                    del self._by_owner[link.owner_id]

        self.generator.release(code)
