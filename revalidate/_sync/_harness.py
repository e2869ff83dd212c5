from __future__ import annotations

import logging
from typing import Optional

import httpx
from typing_extensions import assert_never

from revalidate._config import HarnessOptions
from revalidate._core._protocol import (
    AnyCase,
    AnyState,
    Baseline,
    Done,
    ExplicitMutator,
    MethodNotAllowedCheck,
    MissingDocumentCheck,
    Mutate,
    PassiveMutator,
    RevalidateModified,
    RevalidateSame,
    Scenario,
    StaticDocumentCheck,
    ValidateModified,
    ValidateSame,
    body_of,
    compare_bodies,
    create_baseline,
    dump_request,
    dump_response,
    expect_status,
    join_url,
)
from revalidate._core.models import Request, Response
from revalidate._exceptions import TransportFailure
from revalidate._httpx import _httpx_to_internal, _internal_to_httpx
from revalidate._utils import sleep

logger = logging.getLogger("revalidate.harness")


class ScenarioRunner:
    """
    Drives cases against a live target.

    Phases run strictly one after another; the only suspension points are
    the network round-trips and the mutators' timed waits. The first
    failed expectation raises and ends the case.

    Args:
        options: Harness configuration. Defaults to ``HarnessOptions()``.
        client: The client to send requests with. When omitted, one is
            created with ``options.timeout`` and closed by ``close()``.
    """

    def __init__(
        self,
        options: Optional[HarnessOptions] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.options = options if options is not None else HarnessOptions()
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=self.options.timeout)

    def __enter__(self) -> "ScenarioRunner":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def run(self, case: AnyCase) -> None:
        if isinstance(case, Scenario):
            self.run_scenario(case)
        elif isinstance(case, MissingDocumentCheck):
            self.check_missing_document(case)
        elif isinstance(case, StaticDocumentCheck):
            self.check_static_document(case)
        elif isinstance(case, MethodNotAllowedCheck):
            self.check_method_not_allowed(case)
        else:
            assert_never(case)

    def run_scenario(self, scenario: Scenario) -> None:
        state: Optional[AnyState] = create_baseline(scenario, self.options.target)

        while state:
            logger.debug(f"Handling phase: {state.__class__.__name__}")
            if isinstance(state, (Baseline, ValidateSame, ValidateModified, RevalidateModified, RevalidateSame)):
                response = self._send(state.request, case=scenario.name, phase=state.phase.value)
                state = state.next(response)
            elif isinstance(state, Mutate):
                state = self._handle_mutation(state)
            elif isinstance(state, Done):
                state = state.next()
            else:
                assert_never(state)

    def _handle_mutation(self, state: Mutate) -> RevalidateModified:
        updater = state.updater
        if isinstance(updater, ExplicitMutator):
            delay = updater.delay if updater.delay is not None else self.options.tick
            logger.debug("Waiting %s seconds before updating the document", delay)
            sleep(delay)
            response = self._send(updater.request(state.url), case=state.scenario.name, phase=state.phase.value)
            return state.next(response)
        elif isinstance(updater, PassiveMutator):
            window = updater.window if updater.window is not None else self.options.granularity
            logger.debug("Waiting %s seconds for the document to roll over", window)
            sleep(window)
            return state.next(None)
        else:
            assert_never(updater)

    def check_missing_document(self, case: MissingDocumentCheck) -> None:
        response = self._send(Request("GET", join_url(self.options.target, case.path)), case=case.name)
        expect_status(response, 410, case=case.name)

    def check_static_document(self, case: StaticDocumentCheck) -> None:
        request = Request("GET", join_url(self.options.target, case.path))
        first = self._send(request, case=case.name)
        expect_status(first, 200, case=case.name)

        sleep(self.options.tick)
        second = self._send(request, case=case.name)
        expect_status(second, 200, case=case.name)

        # The content date is pinned; the generation line is not.
        compare_bodies(body_of(first), body_of(second), same=True, identical=False, case=case.name)

    def check_method_not_allowed(self, case: MethodNotAllowedCheck) -> None:
        response = self._send(Request(case.method, join_url(self.options.target, case.path)), case=case.name)
        expect_status(response, 405, case=case.name)

    def _send(self, request: Request, case: str, phase: Optional[str] = None) -> Response:
        logger.debug("REQUEST:\n%s", dump_request(request))
        try:
            httpx_response = self.client.send(_internal_to_httpx(request))
            httpx_response.read()
        except httpx.RequestError as exc:
            raise TransportFailure(f"Error retrieving response: {exc!r}", case=case, phase=phase) from exc
        response = _httpx_to_internal(httpx_response)
        logger.debug("RESPONSE:\n%s", dump_response(response))
        return response
