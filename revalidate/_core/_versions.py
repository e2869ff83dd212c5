"""
Time-bucket versions for the validation resource.

A non-static resource is "regenerated" every ``granularity`` seconds: its
version is the current UTC time with the seconds-of-minute truncated down
to a multiple of the granularity. Every request inside one window sees the
same version and the first request after the window rolls over sees a new
one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from revalidate._core._headers import quote_etag
from revalidate._utils import BaseClock, Clock, format_http_date

ETAG_FORMAT = "%Y-%m-%d,%H:%M:%S"


@dataclass(frozen=True, order=True)
class Version:
    """
    Opaque, totally ordered version token.

    Two versions are equal iff their truncated timestamps match.
    """

    timestamp: int
    """Whole seconds since the epoch, UTC."""

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Version":
        return cls(int(moment.timestamp()))

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def etag(self) -> str:
        """The quoted entity-tag, e.g. ``"2012-12-20,20:12:12"``."""
        return quote_etag(self.to_datetime().strftime(ETAG_FORMAT))

    @property
    def last_modified(self) -> str:
        """The canonical HTTP-date rendering, e.g. ``Thu, 20 Dec 2012 20:12:12 GMT``."""
        return format_http_date(self.timestamp)

    def successor(self) -> "Version":
        return Version(self.timestamp + 1)


STATIC_VERSION = Version.from_datetime(datetime(2012, 12, 20, 20, 12, 12, tzinfo=timezone.utc))


def current_version(
    now: float,
    granularity: int,
    is_static: bool,
    static_version: Version = STATIC_VERSION,
) -> Version:
    """
    Map wall-clock time to the resource version.

    Truncates the seconds-of-minute of ``now`` down to the nearest multiple
    of ``granularity``; minutes and larger fields are left unchanged. Static
    resources always get ``static_version``.

    Examples:
    --------
    >>> # 20:12:44 with 15 second buckets -> 20:12:30
    >>> current_version(1356034364.7, 15, is_static=False).to_datetime().second
    30
    >>> current_version(1356034364.7, 15, is_static=True) == STATIC_VERSION
    True
    """
    if is_static:
        return static_version

    moment = datetime.fromtimestamp(now, tz=timezone.utc)
    seconds = (moment.second // granularity) * granularity
    return Version.from_datetime(moment.replace(second=seconds, microsecond=0))


class VersionClock:
    def __init__(
        self,
        granularity: int,
        clock: Optional[BaseClock] = None,
        static_version: Version = STATIC_VERSION,
    ) -> None:
        self.granularity = granularity
        self.static_version = static_version
        self._clock = clock if clock else Clock()

    def now(self) -> float:
        return self._clock.now()

    def current(self, is_static: bool, now: Optional[float] = None) -> Version:
        return current_version(
            self.now() if now is None else now,
            self.granularity,
            is_static,
            static_version=self.static_version,
        )
