import logging
import threading
from typing import Dict, Optional

from shortlinks.models.user import User

logger = logging.getLogger(__name__)


class UserRegistry:
    """Thread-safe map of users, keyed by id and by session token."""

    def __init__(self):
        self._by_id: Dict[str, User] = {}
        self._id_by_session: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_token: str) -> User:
        """Return the user bound to a session token, creating it on first use."""
        if not session_token:
            raise ValueError("Session token is required")

        with self._lock:
            user_id = self._id_by_session.get(session_token)
            if user_id is not None:
                return self._by_id[user_id]

            user = User(session_token=session_token)
            self._by_id[user.id] = user
            self._id_by_session[session_token] = user.id

        logger.info("Created user %s", user.id)
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._by_id.get(user_id)

    def find_by_session(self, session_token: str) -> Optional[User]:
        with self._lock:
            user_id = self._id_by_session.get(session_token)
            return self._by_id.get(user_id) if user_id is not None else None

    def delete(self, user_id: str) -> bool:
        """Forget a user. Links the user created are left to the link registry."""
        with self._lock:
            user = self._by_id.pop(user_id, None)
            if user is None:
                return False
            self._id_by_session.pop(user.session_token, None)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
