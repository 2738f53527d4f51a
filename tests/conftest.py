"""
Test configuration and fixtures for the link shortener.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortlinks.config import Settings
from shortlinks.container import build_container
from shortlinks.notifications import NullNotifier
from shortlinks.services.link_service import LinkService
from shortlinks.services.short_code_generator import ShortCodeGenerator
from shortlinks.storage.link_registry import LinkRegistry
from shortlinks.storage.user_registry import UserRegistry


class FakeClock:
    """Manually advanced clock for simulating the passage of time"""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingNotifier(NullNotifier):
    """Notifier that remembers what it was asked to deliver"""

    def __init__(self):
        self.sent = []

    def notify(self, owner_id, link, message):
        self.sent.append((owner_id, link.short_code, message))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def generator():
    return ShortCodeGenerator()


@pytest.fixture
def registry(generator, clock):
    """A fresh registry: 8-char codes, 24h TTL, 10 clicks by default"""
    return LinkRegistry(
        generator=generator,
        code_length=8,
        ttl=timedelta(hours=24),
        default_click_limit=10,
        clock=clock,
    )


@pytest.fixture
def users():
    return UserRegistry()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def link_service(registry, users, notifier):
    return LinkService(registry=registry, users=users, notifier=notifier, base_url="http://sho.rt/")


@pytest.fixture
def settings():
    return Settings(
        base_url="http://testserver",
        sweeper_enabled=False,
        notification_backend="inbox",
    )


@pytest.fixture
def container(settings, clock):
    return build_container(settings, clock=clock)


@pytest.fixture
def client(container):
    """
    Test client backed by its own container.
    This is the main fixture that API tests will use.
    """
    app = create_app(container)
    with TestClient(app) as test_client:
        yield test_client
