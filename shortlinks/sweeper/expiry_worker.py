"""
Expired Link Sweeper

Periodically removes expired links from the registry and tells their owners.

Architecture:
- One sweep = purge expired links, then notify per removed link
- A failing notification is logged and skipped; the rest still go out
- A failing sweep is logged and retried on the next tick, not immediately
- Runs as an asyncio task next to the web app; the sweep itself runs in a
  worker thread because the registry uses thread locks
"""

import asyncio
import logging
from typing import List

from shortlinks.models.link import LinkRecord
from shortlinks.services.link_service import LinkService

logger = logging.getLogger(__name__)


class ExpiredLinkSweeper:
    """Scheduled eviction of expired links."""

    def __init__(self, link_service: LinkService, interval_seconds: float = 3600):
        """
        Args:
            link_service: Service used to purge links and notify owners
            interval_seconds: Pause between two sweeps
        """
        self.link_service = link_service
        self.interval_seconds = interval_seconds
        self.running = False
        self.sweeps_completed = 0
        self._stop_requested = False
        self._stop_event = asyncio.Event()

    def run_once(self) -> List[LinkRecord]:
        """
        Run a single sweep.

        Returns:
            The links removed by this sweep
        """
        removed = self.link_service.purge_expired()

        for link in removed:
            try:
                self.link_service.notify_expired(link)
            except Exception:
                logger.exception("Failed to notify owner of expired link %s", link.short_code)

        self.sweeps_completed += 1
        if removed:
            logger.info("Sweep removed %d expired links", len(removed))
        return removed

    async def start(self) -> None:
        """Sweep every interval_seconds until stop() is called."""
        if self._stop_requested:
            logger.info("Expired link sweeper stopped before its first sweep")
            return

        self.running = True
        logger.info("Expired link sweeper started (interval %ss)", self.interval_seconds)

        while not self._stop_requested:
            try:
                # An in-flight sweep runs to completion even if the task is cancelled
                await asyncio.to_thread(self.run_once)
            except asyncio.CancelledError:
                logger.info("Sweeper task cancelled")
                break
            except Exception:
                logger.exception("Sweep failed, retrying on next tick")

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                logger.info("Sweeper task cancelled")
                break

        self.running = False
        logger.info("Expired link sweeper stopped")

    def stop(self) -> None:
        """
        Stop the sweeper after the current sweep.

        Also honoured when called before start() gets to run.
        """
        self._stop_requested = True
        self.running = False
        self._stop_event.set()
