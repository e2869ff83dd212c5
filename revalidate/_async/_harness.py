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
from revalidate._utils import asleep

logger = logging.getLogger("revalidate.harness")


class AsyncScenarioRunner:
    """
    Drives cases against a live target.

    Phases run strictly one after another; the only suspension points are
    the network round-trips and the mutators' timed waits. The first
    failed expectation raises and ends the case.

    Args:
        options: Harness configuration. Defaults to ``HarnessOptions()``.
        client: The client to send requests with. When omitted, one is
            created with ``options.timeout`` and closed by ``aclose()``.
    """

    def __init__(
        self,
        options: Optional[HarnessOptions] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.options = options if options is not None else HarnessOptions()
        self._owns_client = client is None
        self.client = client if client is not None else httpx.AsyncClient(timeout=self.options.timeout)

    async def __aenter__(self) -> "AsyncScenarioRunner":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def run(self, case: AnyCase) -> None:
        if isinstance(case, Scenario):
            await self.run_scenario(case)
        elif isinstance(case, MissingDocumentCheck):
            await self.check_missing_document(case)
        elif isinstance(case, StaticDocumentCheck):
            await self.check_static_document(case)
        elif isinstance(case, MethodNotAllowedCheck):
            await self.check_method_not_allowed(case)
        else:
            assert_never(case)

    async def run_scenario(self, scenario: Scenario) -> None:
        state: Optional[AnyState] = create_baseline(scenario, self.options.target)

        while state:
            logger.debug(f"Handling phase: {state.__class__.__name__}")
            if isinstance(state, (Baseline, ValidateSame, ValidateModified, RevalidateModified, RevalidateSame)):
                response = await self._send(state.request, case=scenario.name, phase=state.phase.value)
                state = state.next(response)
            elif isinstance(state, Mutate):
                state = await self._handle_mutation(state)
            elif isinstance(state, Done):
                state = state.next()
            else:
                assert_never(state)

    async def _handle_mutation(self, state: Mutate) -> RevalidateModified:
        updater = state.updater
        if isinstance(updater, ExplicitMutator):
            delay = updater.delay if updater.delay is not None else self.options.tick
            logger.debug("Waiting %s seconds before updating the document", delay)
            await asleep(delay)
            response = await self._send(updater.request(state.url), case=state.scenario.name, phase=state.phase.value)
            return state.next(response)
        elif isinstance(updater, PassiveMutator):
            window = updater.window if updater.window is not None else self.options.granularity
            logger.debug("Waiting %s seconds for the document to roll over", window)
            await asleep(window)
            return state.next(None)
        else:
            assert_never(updater)

    async def check_missing_document(self, case: MissingDocumentCheck) -> None:
        response = await self._send(Request("GET", join_url(self.options.target, case.path)), case=case.name)
        expect_status(response, 410, case=case.name)

    async def check_static_document(self, case: StaticDocumentCheck) -> None:
        request = Request("GET", join_url(self.options.target, case.path))
        first = await self._send(request, case=case.name)
        expect_status(first, 200, case=case.name)

        await asleep(self.options.tick)
        second = await self._send(request, case=case.name)
        expect_status(second, 200, case=case.name)

        # The content date is pinned; the generation line is not.
        compare_bodies(body_of(first), body_of(second), same=True, identical=False, case=case.name)

    async def check_method_not_allowed(self, case: MethodNotAllowedCheck) -> None:
        response = await self._send(Request(case.method, join_url(self.options.target, case.path)), case=case.name)
        expect_status(response, 405, case=case.name)

    async def _send(self, request: Request, case: str, phase: Optional[str] = None) -> Response:
        logger.debug("REQUEST:\n%s", dump_request(request))
        try:
            httpx_response = await self.client.send(_internal_to_httpx(request))
            await httpx_response.aread()
        except httpx.RequestError as exc:
            raise TransportFailure(f"Error retrieving response: {exc!r}", case=case, phase=phase) from exc
        response = _httpx_to_internal(httpx_response)
        logger.debug("RESPONSE:\n%s", dump_response(response))
        return response
