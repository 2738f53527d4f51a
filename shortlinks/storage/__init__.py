"""
In-memory registries for links and users.

Both registries are thread safe and are built once per application by the
container.
"""

from .link_registry import LinkRegistry, utc_now
from .user_registry import UserRegistry

__all__ = [
    "LinkRegistry",
    "UserRegistry",
    "utc_now",
]
