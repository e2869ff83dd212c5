from __future__ import annotations

import os
from dataclasses import dataclass, field

from revalidate._core._versions import STATIC_VERSION, Version
from revalidate._exceptions import ConfigurationError

DEFAULT_GRANULARITY = 15
DEFAULT_TARGET = "http://localhost:20752"


def _check_granularity(granularity: int) -> None:
    if granularity <= 0 or 60 % granularity != 0:
        raise ConfigurationError(f"Granularity must be a positive divisor of 60, got {granularity!r}")


@dataclass
class ServerOptions:
    """
    Configuration of the validation server.

    Attributes:
    ----------
    granularity : int
        Width, in seconds, of the window a non-static document keeps its
        version for. Must divide 60 so that every window starts at the
        same seconds-of-minute offset.

        Default: 15
        Environment: REVALIDATE_GRANULARITY

    static_version : Version
        Version served for every ``/static/`` document.

        Default: Thu, 20 Dec 2012 20:12:12 GMT
    """

    granularity: int = DEFAULT_GRANULARITY
    static_version: Version = field(default=STATIC_VERSION)

    def __post_init__(self) -> None:
        _check_granularity(self.granularity)

    @classmethod
    def from_env(cls) -> "ServerOptions":
        return cls(granularity=int(os.getenv("REVALIDATE_GRANULARITY", str(DEFAULT_GRANULARITY))))


@dataclass
class HarnessOptions:
    """
    Configuration of the scenario harness.

    Attributes:
    ----------
    target : str
        Base URL of the server under test. Scenario paths are appended to it.

        Default: http://localhost:20752
        Environment: REVALIDATE_TARGET

    granularity : int
        The target's version window in seconds. A passive mutation waits
        this long so the target's version is guaranteed to roll over.
        Must match the target's own setting.

        Default: 15
        Environment: REVALIDATE_GRANULARITY

    tick : float
        The short pause, in seconds, taken before an explicit mutation and
        between the two fetches of a static document.

        Default: 1.0
        Environment: REVALIDATE_TICK

    timeout : float
        Transport timeout, in seconds, for every request. Exceeding it is a
        fatal failure of the case.

        Default: 5.0
        Environment: REVALIDATE_TIMEOUT
    """

    target: str = DEFAULT_TARGET
    granularity: int = DEFAULT_GRANULARITY
    tick: float = 1.0
    timeout: float = 5.0

    def __post_init__(self) -> None:
        _check_granularity(self.granularity)
        if self.tick <= 0:
            raise ConfigurationError(f"Tick must be positive, got {self.tick!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_env(cls) -> "HarnessOptions":
        return cls(
            target=os.getenv("REVALIDATE_TARGET", DEFAULT_TARGET),
            granularity=int(os.getenv("REVALIDATE_GRANULARITY", str(DEFAULT_GRANULARITY))),
            tick=float(os.getenv("REVALIDATE_TICK", "1.0")),
            timeout=float(os.getenv("REVALIDATE_TIMEOUT", "5.0")),
        )
