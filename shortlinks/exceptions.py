"""
Error taxonomy for the link registry.

Every failure the core can report is a subclass of LinkError, so callers
(routes, the sweeper, tests) can catch the whole family or a single case.
Expired and limit-exceeded errors carry the affected record, which the
service layer needs to build the owner's notification.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from shortlinks.models.link import LinkRecord


class LinkError(Exception):
    """Base class for link registry errors"""
    pass


class InvalidUrlError(LinkError):
    """The URL failed validation (user-correctable)"""

    def __init__(self, url: str):
        super().__init__(f"Invalid URL: {url!r}")
        self.url = url


class InvalidClickLimitError(LinkError):
    """A click limit must be a positive integer"""

    def __init__(self, limit):
        super().__init__(f"Click limit must be a positive integer, got {limit!r}")
        self.limit = limit


class LinkNotFoundError(LinkError):
    """No live link exists for the short code"""

    def __init__(self, short_code: str):
        super().__init__(f"Short link not found: {short_code}")
        self.short_code = short_code


class AccessDeniedError(LinkError):
    """The caller does not own the link"""

    def __init__(self, short_code: str):
        super().__init__(f"Access denied to short link: {short_code}")
        self.short_code = short_code


class LinkExpiredError(LinkError):
    """The link outlived its TTL; the owner has to create a new one"""

    def __init__(self, short_code: str, link: Optional["LinkRecord"] = None):
        super().__init__(f"Short link has expired: {short_code}")
        self.short_code = short_code
        self.link = link


class LimitExceededError(LinkError):
    """
    The click quota is used up.

    Recoverable: the owner may raise the limit with update_click_limit.
    """

    def __init__(self, short_code: str, link: Optional["LinkRecord"] = None):
        super().__init__(f"Click limit exceeded for short link: {short_code}")
        self.short_code = short_code
        self.link = link


class GenerationExhaustedError(LinkError):
    """No free short code was found within the attempt budget"""

    def __init__(self, length: int, attempts: int):
        super().__init__(
            f"Could not generate unique short code of length {length} "
            f"after {attempts} attempts"
        )
        self.length = length
        self.attempts = attempts
