"""
Tests for users and the user registry.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortlinks.models.user import MAX_NOTIFICATIONS, User


class TestUserRegistry:

    def test_get_or_create_creates_once(self, users):
        first = users.get_or_create("SESS-abc")
        second = users.get_or_create("SESS-abc")

        assert first is second
        assert first.session_token == "SESS-abc"
        assert len(users) == 1

    def test_different_sessions_different_users(self, users):
        assert users.get_or_create("a").id != users.get_or_create("b").id

    def test_find(self, users):
        user = users.get_or_create("SESS-1")

        assert users.find_by_id(user.id) is user
        assert users.find_by_session("SESS-1") is user
        assert users.find_by_id("nobody") is None
        assert users.find_by_session("nothing") is None

    def test_delete(self, users):
        user = users.get_or_create("SESS-1")

        assert users.delete(user.id) is True
        assert users.find_by_id(user.id) is None
        assert users.find_by_session("SESS-1") is None
        assert users.delete(user.id) is False

    def test_empty_token_rejected(self, users):
        with pytest.raises(ValueError):
            users.get_or_create("")

    def test_concurrent_get_or_create(self, users):
        with ThreadPoolExecutor(max_workers=16) as pool:
            found = list(pool.map(lambda _: users.get_or_create("shared"), range(100)))

        assert len({user.id for user in found}) == 1
        assert len(users) == 1


class TestUser:

    def test_owned_links(self):
        user = User(session_token="t")
        user.add_link("abc")
        user.add_link("def")
        user.add_link("abc")

        assert user.owned_links == ["abc", "def"]
        assert user.remove_link("abc") is True
        assert user.remove_link("abc") is False
        assert user.owned_links == ["def"]

    def test_notifications_bounded_oldest_first(self):
        user = User(session_token="t")
        for i in range(MAX_NOTIFICATIONS + 5):
            user.add_notification(f"message {i}")

        notifications = user.notifications
        assert len(notifications) == MAX_NOTIFICATIONS
        assert notifications[0] == "message 5"
        assert notifications[-1] == f"message {MAX_NOTIFICATIONS + 4}"

    def test_duplicate_notifications_ignored(self):
        user = User(session_token="t")
        user.add_notification("same")
        user.add_notification("same")
        assert user.notifications == ["same"]

    def test_snapshots_are_copies(self):
        user = User(session_token="t")
        user.add_link("abc")
        user.owned_links.append("zzz")
        assert user.owned_links == ["abc"]
