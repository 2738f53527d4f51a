"""
In-memory models for the link shortener.

Records live only in the registries; nothing here is persisted.
"""

from .link import ClickOutcome, LinkRecord, LinkState
from .user import User

__all__ = ["LinkRecord", "LinkState", "ClickOutcome", "User"]
