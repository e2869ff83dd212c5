from __future__ import annotations

import logging
import time
import typing as tp
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

import anyio

from revalidate._async._harness import AsyncScenarioRunner
from revalidate._core._protocol import (
    AnyCase,
    ETagValidator,
    ExplicitMutator,
    LastModifiedValidator,
    MethodNotAllowedCheck,
    MissingDocumentCheck,
    PassiveMutator,
    Scenario,
    StaticDocumentCheck,
)
from revalidate._exceptions import ScenarioFailure
from revalidate._sync._harness import ScenarioRunner

logger = logging.getLogger("revalidate.suite")


@dataclass(frozen=True)
class CaseResult:
    name: str
    failure: Optional[ScenarioFailure] = None
    duration: float = 0.0

    @property
    def passed(self) -> bool:
        return self.failure is None


def default_suite() -> List[AnyCase]:
    """
    The standard set of cases.

    Every case uses its own path, so the cases can share one target and
    run concurrently.
    """
    return [
        MissingDocumentCheck("missing-document", "/gosomewhere/notexpected/"),
        StaticDocumentCheck("static-document", "/static/ourtestdoc/"),
        MethodNotAllowedCheck("method-not-allowed", "/etag/readonly/"),
        Scenario("static-etag", "/static/etag/functest/", ETagValidator()),
        Scenario("static-lastmod", "/static/lastmod/functest/", LastModifiedValidator()),
        Scenario("periodic-etag", "/periodic/etag/functest/", ETagValidator(), PassiveMutator()),
        Scenario("periodic-lastmod", "/periodic/lastmod/functest/", LastModifiedValidator(), PassiveMutator()),
        Scenario("clock-etag", "/clock/etag/functest/", ETagValidator(), ExplicitMutator()),
        Scenario("clock-lastmod", "/clock/lastmod/functest/", LastModifiedValidator(), ExplicitMutator()),
    ]


def _record(case: AnyCase, started: float, failure: Optional[ScenarioFailure]) -> CaseResult:
    duration = time.monotonic() - started
    if failure is None:
        logger.info("PASS %s (%.2fs)", case.name, duration)
    else:
        logger.info("FAIL %s (%.2fs): %s", case.name, duration, failure)
    return CaseResult(name=case.name, failure=failure, duration=duration)


async def arun_suite(cases: Sequence[AnyCase], runner: AsyncScenarioRunner) -> List[CaseResult]:
    """
    Run every case concurrently.

    A failing case is recorded in its result and does not stop the others.
    Results come back in the order of ``cases``.
    """
    results: List[tp.Optional[CaseResult]] = [None] * len(cases)

    async def run_one(index: int, case: AnyCase) -> None:
        started = time.monotonic()
        try:
            await runner.run(case)
        except ScenarioFailure as exc:
            results[index] = _record(case, started, exc)
        else:
            results[index] = _record(case, started, None)

    async with anyio.create_task_group() as task_group:
        for index, case in enumerate(cases):
            task_group.start_soon(run_one, index, case)

    return [result for result in results if result is not None]


def run_suite(cases: Sequence[AnyCase], runner: ScenarioRunner, max_workers: Optional[int] = None) -> List[CaseResult]:
    """
    Run every case on its own worker thread.

    Same contract as ``arun_suite``.
    """

    def run_one(case: AnyCase) -> CaseResult:
        started = time.monotonic()
        try:
            runner.run(case)
        except ScenarioFailure as exc:
            return _record(case, started, exc)
        return _record(case, started, None)

    if not cases:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or len(cases)) as executor:
        return list(executor.map(run_one, cases))
