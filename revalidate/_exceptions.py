from __future__ import annotations

import typing as tp

__all__ = (
    "RevalidateError",
    "ConfigurationError",
    "ScenarioFailure",
    "UnexpectedStatus",
    "BodyMismatch",
    "MissingValidator",
    "TransportFailure",
)


class RevalidateError(Exception): ...


class ConfigurationError(RevalidateError, ValueError): ...


class ScenarioFailure(RevalidateError, AssertionError):
    """
    A check performed by the harness did not hold.

    Failures are fatal for the case that raised them and never retried.
    """

    def __init__(self, message: str, *, case: tp.Optional[str] = None, phase: tp.Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.case = case
        self.phase = phase

    def __str__(self) -> str:
        prefix = ""
        if self.case is not None:
            prefix += f"[{self.case}] "
        if self.phase is not None:
            prefix += f"{self.phase}: "
        return prefix + self.message


class UnexpectedStatus(ScenarioFailure):
    def __init__(self, expected: int, actual: int, **kwargs: tp.Any) -> None:
        super().__init__(f"Expected status code {expected} response code, but got {actual}", **kwargs)
        self.expected = expected
        self.actual = actual


class BodyMismatch(ScenarioFailure): ...


class MissingValidator(ScenarioFailure):
    def __init__(self, header: str, **kwargs: tp.Any) -> None:
        super().__init__(f"Response carries no {header} header to validate against", **kwargs)
        self.header = header


class TransportFailure(ScenarioFailure):
    """The target could not be reached or sent a response that could not be read."""
