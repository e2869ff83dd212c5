from __future__ import annotations

import calendar
import time
import typing as tp
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_tz

import anyio

HEADERS_ENCODING = "iso-8859-1"


class BaseClock:
    def now(self) -> float:
        raise NotImplementedError()


class Clock(BaseClock):
    def now(self) -> float:
        return time.time()


def parse_date(date: str) -> tp.Optional[int]:
    expires = parsedate_tz(date)
    if expires is None:
        return None
    timestamp = calendar.timegm(expires[:6])
    return timestamp


def format_http_date(timestamp: float) -> str:
    """
    Render a POSIX timestamp as an RFC 1123 HTTP-date.

    Sub-second precision is dropped.

    Example output: 'Thu, 20 Dec 2012 20:12:12 GMT'
    """
    moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    return format_datetime(moment, usegmt=True)


def sleep(seconds: tp.Union[int, float]) -> None:
    time.sleep(seconds)


async def asleep(seconds: tp.Union[int, float]) -> None:
    await anyio.sleep(seconds)


def canonical_header_name(name: str) -> str:
    """
    Convert a header name to its canonical Header-Case form.

    Examples:
        >>> canonical_header_name("if-none-match")
        'If-None-Match'
        >>> canonical_header_name("ETAG")
        'Etag'
    """
    return "-".join(word.capitalize() for word in name.split("-"))


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]
