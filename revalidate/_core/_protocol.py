"""
The validation test protocol, without I/O.

A scenario proves that a target honours staleness transitions over time:

    Baseline -> Validating -> Mutating -> Revalidating -> Done

Every state names the request the driver has to send next and turns the
response into the following state via ``next()``. Any expectation that
does not hold raises a ``ScenarioFailure``; nothing is retried. The
drivers in ``revalidate._async`` / ``revalidate._sync`` perform the
network round-trips and the timed waits.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from revalidate._core._headers import Headers, unquote_etag
from revalidate._core.models import Request, Response
from revalidate._exceptions import BodyMismatch, MissingValidator, ScenarioFailure, UnexpectedStatus
from revalidate._utils import first_line, parse_date

logger = logging.getLogger("revalidate.core.protocol")


@dataclass(frozen=True)
class DerivedRequests:
    modified: Request
    """Expected to be answered 304 before the mutation and 200 after it."""

    same: Request
    """Expected to be answered 200 before the mutation and 412 after it."""


@dataclass(frozen=True)
class ETagValidator:
    """Revalidates with ``If-None-Match`` / ``If-Match`` built from the ``ETag``."""

    header: ClassVar[str] = "ETag"

    def build(self, request: Request, response: Response) -> DerivedRequests:
        etag = response.headers.get_first(self.header)
        if not etag or unquote_etag(etag) is None:
            raise MissingValidator(self.header)
        return DerivedRequests(
            modified=Request("GET", request.url, Headers({"If-None-Match": etag})),
            same=Request("GET", request.url, Headers({"If-Match": etag})),
        )


@dataclass(frozen=True)
class LastModifiedValidator:
    """Revalidates with ``If-Modified-Since`` / ``If-Unmodified-Since`` built from ``Last-Modified``."""

    header: ClassVar[str] = "Last-Modified"

    def build(self, request: Request, response: Response) -> DerivedRequests:
        last_modified = response.headers.get_first(self.header)
        if not last_modified or parse_date(last_modified) is None:
            raise MissingValidator(self.header)
        return DerivedRequests(
            modified=Request("GET", request.url, Headers({"If-Modified-Since": last_modified})),
            same=Request("GET", request.url, Headers({"If-Unmodified-Since": last_modified})),
        )


AnyValidator = Union[ETagValidator, LastModifiedValidator]


@dataclass(frozen=True)
class ExplicitMutator:
    """
    Pause, then PUT to the resource and require 204.

    The pause keeps the mutation out of the second the baseline was
    served in.
    """

    delay: Optional[float] = None
    """Seconds to wait before the PUT; ``HarnessOptions.tick`` when None."""

    def request(self, url: str) -> Request:
        return Request("PUT", url)


@dataclass(frozen=True)
class PassiveMutator:
    """Send nothing; wait a full granularity window so the version rolls over."""

    window: Optional[float] = None
    """Seconds to wait; ``HarnessOptions.granularity`` when None."""


AnyUpdater = Union[ExplicitMutator, PassiveMutator]


@dataclass(frozen=True)
class Scenario:
    name: str
    path: str
    validator: AnyValidator
    updater: Optional[AnyUpdater] = None
    """Without an updater the scenario stops after the Validating phase."""


@dataclass(frozen=True)
class MissingDocumentCheck:
    """GET an unrecognized path and require 410."""

    name: str
    path: str


@dataclass(frozen=True)
class StaticDocumentCheck:
    """
    GET a static document twice, one tick apart.

    Both responses must be 200 with equal first lines and different bodies.
    """

    name: str
    path: str


@dataclass(frozen=True)
class MethodNotAllowedCheck:
    """Send ``method`` to a read-only document and require 405."""

    name: str
    path: str
    method: str = "PUT"


AnyCase = Union[Scenario, MissingDocumentCheck, StaticDocumentCheck, MethodNotAllowedCheck]


class Phase(str, Enum):
    BASELINE = "Baseline"
    VALIDATING = "Validating"
    MUTATING = "Mutating"
    REVALIDATING = "Revalidating"
    DONE = "Done"


def join_url(target: str, path: str) -> str:
    return target.rstrip("/") + "/" + path.lstrip("/")


def expect_status(response: Response, expected: int, **context: Any) -> None:
    if response.status_code != expected:
        raise UnexpectedStatus(expected, response.status_code, **context)


def compare_bodies(body1: str, body2: str, same: bool, identical: bool, **context: Any) -> None:
    """
    Compare two document bodies.

    ``same`` is the expectation for the first lines (the content version),
    ``identical`` the expectation for the complete bodies.
    """
    line1 = first_line(body1)
    line2 = first_line(body2)
    if same and line1 != line2:
        raise BodyMismatch("First lines of requests are different, expected to be same.", **context)
    elif not same and line1 == line2:
        raise BodyMismatch("First line of request bodies are identical, expected differences.", **context)
    if identical and body1 != body2:
        raise BodyMismatch("Request bodies are not the same, expected to be identical.", **context)
    elif not identical and body1 == body2:
        raise BodyMismatch("Request bodies are identical, expected differences.", **context)


def body_of(response: Response) -> str:
    return response.text.strip()


@dataclass
class State(ABC):
    scenario: Scenario
    phase: ClassVar[Phase]

    @property
    def context(self) -> dict[str, str]:
        return {"case": self.scenario.name, "phase": self.phase.value}

    @abstractmethod
    def next(self, *args: Any, **kwargs: Any) -> Union["State", None]:
        raise NotImplementedError("Subclasses must implement this method")


@dataclass
class Baseline(State):
    phase: ClassVar[Phase] = Phase.BASELINE

    request: Request

    def next(self, response: Response) -> "ValidateSame":
        expect_status(response, 200, **self.context)
        try:
            derived = self.scenario.validator.build(self.request, response)
        except ScenarioFailure as exc:
            exc.case, exc.phase = self.scenario.name, self.phase.value
            raise
        return ValidateSame(scenario=self.scenario, url=self.request.url, body=body_of(response), derived=derived)


@dataclass
class _Validated(State):
    url: str
    body: str
    """Baseline body, whitespace-trimmed."""

    derived: DerivedRequests


@dataclass
class ValidateSame(_Validated):
    phase: ClassVar[Phase] = Phase.VALIDATING

    @property
    def request(self) -> Request:
        return self.derived.same

    def next(self, response: Response) -> "ValidateModified":
        expect_status(response, 200, **self.context)
        compare_bodies(self.body, body_of(response), same=True, identical=True, **self.context)
        return ValidateModified(scenario=self.scenario, url=self.url, body=self.body, derived=self.derived)


@dataclass
class ValidateModified(_Validated):
    phase: ClassVar[Phase] = Phase.VALIDATING

    @property
    def request(self) -> Request:
        return self.derived.modified

    def next(self, response: Response) -> Union["Mutate", "Done"]:
        expect_status(response, 304, **self.context)
        if self.scenario.updater is None:
            logger.debug("No updater configured for %s, read-only validation complete", self.scenario.name)
            return Done(scenario=self.scenario)
        return Mutate(scenario=self.scenario, url=self.url, body=self.body, derived=self.derived)


@dataclass
class Mutate(_Validated):
    phase: ClassVar[Phase] = Phase.MUTATING

    @property
    def updater(self) -> AnyUpdater:
        assert self.scenario.updater is not None
        return self.scenario.updater

    def next(self, response: Optional[Response] = None) -> "RevalidateModified":
        """
        Accept the outcome of the mutation.

        ``response`` is the answer to the explicit PUT, or None for a
        passive mutation.
        """
        if isinstance(self.updater, ExplicitMutator):
            if response is None:
                raise ScenarioFailure("Explicit mutation produced no response", **self.context)
            expect_status(response, 204, **self.context)
        return RevalidateModified(scenario=self.scenario, url=self.url, body=self.body, derived=self.derived)


@dataclass
class RevalidateModified(_Validated):
    phase: ClassVar[Phase] = Phase.REVALIDATING

    @property
    def request(self) -> Request:
        return self.derived.modified

    def next(self, response: Response) -> "RevalidateSame":
        expect_status(response, 200, **self.context)
        compare_bodies(self.body, body_of(response), same=False, identical=False, **self.context)
        return RevalidateSame(scenario=self.scenario, url=self.url, body=self.body, derived=self.derived)


@dataclass
class RevalidateSame(_Validated):
    phase: ClassVar[Phase] = Phase.REVALIDATING

    @property
    def request(self) -> Request:
        return self.derived.same

    def next(self, response: Response) -> "Done":
        expect_status(response, 412, **self.context)
        return Done(scenario=self.scenario)


@dataclass
class Done(State):
    phase: ClassVar[Phase] = Phase.DONE

    def next(self) -> None:
        return None


AnyState = Union[
    Baseline,
    ValidateSame,
    ValidateModified,
    Mutate,
    RevalidateModified,
    RevalidateSame,
    Done,
]


def create_baseline(scenario: Scenario, target: str) -> Baseline:
    return Baseline(scenario=scenario, request=Request("GET", join_url(target, scenario.path)))


def dump_request(request: Request) -> str:
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.multi_items())
    return "\n".join(lines)


def dump_response(response: Response) -> str:
    lines = [f"{response.status_code}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.multi_items())
    if response.content:
        lines.append("")
        lines.append(response.text.strip())
    return "\n".join(lines)
