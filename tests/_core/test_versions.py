from datetime import datetime, timezone

import pytest
from inline_snapshot import snapshot

from revalidate import STATIC_VERSION, Version, VersionClock, current_version
from revalidate._utils import BaseClock


def at(hour: int, minute: int, second: int, microsecond: int = 0) -> float:
    return datetime(2012, 12, 20, hour, minute, second, microsecond, tzinfo=timezone.utc).timestamp()


class FixedClock(BaseClock):
    def __init__(self, now: float) -> None:
        self._now = now

    def now(self) -> float:
        return self._now


@pytest.mark.parametrize("second", [30, 31, 37, 44])
def test_same_window_same_version(second: int):
    assert current_version(at(20, 12, second, 999_999), 15, is_static=False) == current_version(
        at(20, 12, 30), 15, is_static=False
    )


def test_only_seconds_are_truncated():
    version = current_version(at(20, 12, 44, 700_000), 15, is_static=False)

    assert version.to_datetime() == datetime(2012, 12, 20, 20, 12, 30, tzinfo=timezone.utc)


def test_window_rollover_produces_new_version():
    before = current_version(at(20, 12, 59), 15, is_static=False)
    after = current_version(at(20, 13, 0), 15, is_static=False)

    assert before < after
    assert before.to_datetime().second == 45
    assert after.to_datetime().second == 0


@pytest.mark.parametrize("granularity", [1, 2, 3, 4, 5, 6, 10, 12, 15, 20, 30, 60])
def test_window_start_is_a_multiple_of_granularity(granularity: int):
    version = current_version(at(20, 12, 59, 500_000), granularity, is_static=False)

    assert version.to_datetime().second % granularity == 0
    assert version.to_datetime().minute == 12


def test_static_version_ignores_time():
    assert current_version(at(1, 2, 3), 15, is_static=True) == STATIC_VERSION
    assert current_version(at(23, 59, 59), 1, is_static=True) == STATIC_VERSION


def test_version_renderings():
    assert STATIC_VERSION.etag == snapshot('"2012-12-20,20:12:12"')
    assert STATIC_VERSION.last_modified == snapshot("Thu, 20 Dec 2012 20:12:12 GMT")


def test_successor_is_strictly_greater():
    version = Version(1356034332)

    assert version.successor() > version
    assert version.successor().etag != version.etag


def test_version_clock_uses_its_clock():
    clock = VersionClock(15, clock=FixedClock(at(20, 12, 44)))

    assert clock.current(is_static=False) == current_version(at(20, 12, 30), 15, is_static=False)
    assert clock.current(is_static=False, now=at(20, 12, 46)).to_datetime().second == 45
    assert clock.current(is_static=True) == STATIC_VERSION


def test_version_clock_custom_static_version():
    pinned = Version(0)
    clock = VersionClock(15, static_version=pinned)

    assert clock.current(is_static=True) == pinned
    assert pinned.last_modified == snapshot("Thu, 01 Jan 1970 00:00:00 GMT")
