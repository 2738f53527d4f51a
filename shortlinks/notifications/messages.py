"""Human-readable messages for link lifecycle events."""

from shortlinks.models.link import LinkRecord

TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"


def expired_message(link: LinkRecord) -> str:
    return (
        f"Link {link.short_code} expired at "
        f"{link.expires_at.strftime(TIMESTAMP_FORMAT)}. Create a new link."
    )


def limit_exceeded_message(link: LinkRecord) -> str:
    return (
        f"Link {link.short_code} reached its click limit "
        f"({link.click_limit}). Create a new link or raise the limit."
    )


def updated_message(link: LinkRecord, details: str) -> str:
    return f"Link {link.short_code} updated: {details}"
