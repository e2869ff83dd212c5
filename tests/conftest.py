from datetime import datetime, timezone

import pytest
import time_machine

from revalidate import HarnessOptions, ServerOptions, ServerTransport, ValidationServer

# The start of a granularity window, so a full window is available to every test
START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def traveller():
    with time_machine.travel(START, tick=False) as traveller:
        yield traveller


@pytest.fixture()
def server(traveller) -> ValidationServer:
    return ValidationServer(ServerOptions(granularity=15))


@pytest.fixture()
def transport(server: ValidationServer) -> ServerTransport:
    return ServerTransport(server)


@pytest.fixture()
def harness_options() -> HarnessOptions:
    return HarnessOptions(target="http://testserver", granularity=15, tick=1.0)


@pytest.fixture()
def instant_sleep(monkeypatch, traveller):
    """Replace the harness waits with jumps of the frozen clock."""

    def sleep(seconds):
        traveller.shift(seconds)

    async def asleep(seconds):
        traveller.shift(seconds)

    monkeypatch.setattr("revalidate._sync._harness.sleep", sleep)
    monkeypatch.setattr("revalidate._async._harness.asleep", asleep)
    return traveller
