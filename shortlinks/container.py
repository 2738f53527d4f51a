"""
Application container.

Every long-lived component is built exactly once here and handed to its
dependents explicitly. The web app keeps the container on `app.state`;
tests build their own with a fake clock.
"""

from dataclasses import dataclass
from typing import Optional

from shortlinks.config import Settings
from shortlinks.notifications import NotificationBackend, NotificationFactory, NotificationStrategy
from shortlinks.services.link_service import LinkService
from shortlinks.services.short_code_generator import ShortCodeGenerator
from shortlinks.storage.link_registry import Clock, LinkRegistry, utc_now
from shortlinks.storage.user_registry import UserRegistry
from shortlinks.sweeper.expiry_worker import ExpiredLinkSweeper


@dataclass
class AppContainer:
    settings: Settings
    code_generator: ShortCodeGenerator
    link_registry: LinkRegistry
    user_registry: UserRegistry
    notifier: NotificationStrategy
    link_service: LinkService
    sweeper: ExpiredLinkSweeper


def build_container(settings: Optional[Settings] = None, clock: Clock = utc_now) -> AppContainer:
    settings = settings or Settings()

    code_generator = ShortCodeGenerator(max_attempts=settings.max_generation_attempts)
    link_registry = LinkRegistry(
        generator=code_generator,
        code_length=settings.short_code_length,
        ttl=settings.default_ttl,
        default_click_limit=settings.default_click_limit,
        clock=clock,
    )
    user_registry = UserRegistry()
    notifier = NotificationFactory.create(
        NotificationBackend(settings.notification_backend),
        user_registry,
        enabled=settings.notifications_enabled,
        clock=clock,
    )
    link_service = LinkService(
        registry=link_registry,
        users=user_registry,
        notifier=notifier,
        base_url=settings.base_url,
    )
    sweeper = ExpiredLinkSweeper(link_service, interval_seconds=settings.sweep_interval_seconds)

    return AppContainer(
        settings=settings,
        code_generator=code_generator,
        link_registry=link_registry,
        user_registry=user_registry,
        notifier=notifier,
        link_service=link_service,
        sweeper=sweeper,
    )
