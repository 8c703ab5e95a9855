from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlsplit

from .errors import InvalidNodeError


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_BAD_URL_CHARS_RE = re.compile(r"[\s<>\"{}|\\^`\x00-\x1f\x7f]")
STRAY_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ChangeFrequency(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_well_formed_absolute_url(url: str | None) -> bool:
    """True for an absolute URI with a scheme and host and no unescaped characters."""
    if not url or _BAD_URL_CHARS_RE.search(url) or STRAY_PERCENT_RE.search(url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing .port validates the authority component.
        _ = parts.port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    return bool(parts.netloc) and bool(parts.hostname)


@dataclass(frozen=True)
class SitemapNode:
    """One ``<url>`` entry of a sitemap."""

    url: str
    last_modified: datetime = field(default_factory=utcnow)
    frequency: ChangeFrequency = ChangeFrequency.WEEKLY
    priority: float = 0.5

    def __post_init__(self) -> None:
        if not isinstance(self.frequency, ChangeFrequency):
            try:
                object.__setattr__(self, "frequency", ChangeFrequency(str(self.frequency).lower()))
            except ValueError:
                raise InvalidNodeError(f"unknown change frequency: {self.frequency!r}") from None
        try:
            priority = float(self.priority)
        except (TypeError, ValueError):
            raise InvalidNodeError(f"priority must be a number: {self.priority!r}") from None
        if not 0.0 <= priority <= 1.0:
            raise InvalidNodeError(f"priority must be within [0.0, 1.0], got {priority}")
        object.__setattr__(self, "priority", priority)
