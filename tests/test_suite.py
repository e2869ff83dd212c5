import httpx
import pytest

from revalidate import (
    AsyncScenarioRunner,
    CaseResult,
    ScenarioRunner,
    UnexpectedStatus,
    arun_suite,
    default_suite,
    run_suite,
)


def test_default_suite_uses_distinct_paths():
    cases = default_suite()

    assert len({case.path for case in cases}) == len(cases)
    assert [case.name for case in cases] == [
        "missing-document",
        "static-document",
        "method-not-allowed",
        "static-etag",
        "static-lastmod",
        "periodic-etag",
        "periodic-lastmod",
        "clock-etag",
        "clock-lastmod",
    ]


def test_run_suite_against_built_in_server(transport, harness_options, instant_sleep):
    with httpx.Client(transport=transport) as client:
        results = run_suite(default_suite(), ScenarioRunner(harness_options, client=client), max_workers=1)

    assert [result.name for result in results] == [case.name for case in default_suite()]
    failed = {result.name: result.failure for result in results if not result.passed}
    # Replaying Last-Modified as If-Modified-Since gets the full document back
    assert sorted(failed) == ["clock-lastmod", "periodic-lastmod", "static-lastmod"]
    assert all(isinstance(failure, UnexpectedStatus) and failure.phase == "Validating" for failure in failed.values())


@pytest.mark.anyio
async def test_arun_suite_isolates_failures(transport, harness_options, instant_sleep):
    cases = [case for case in default_suite() if not case.name.startswith("periodic")]

    async with httpx.AsyncClient(transport=transport) as client:
        results = await arun_suite(cases, AsyncScenarioRunner(harness_options, client=client))

    assert [result.name for result in results] == [case.name for case in cases]
    assert {result.name for result in results if not result.passed} == {"static-lastmod", "clock-lastmod"}


def test_empty_suite(harness_options):
    with ScenarioRunner(harness_options) as runner:
        assert run_suite([], runner) == []


def test_case_result():
    assert CaseResult("ok").passed
    assert not CaseResult("bad", failure=UnexpectedStatus(200, 500)).passed
