from revalidate._async._harness import AsyncScenarioRunner as AsyncScenarioRunner
from revalidate._config import HarnessOptions as HarnessOptions, ServerOptions as ServerOptions
from revalidate._core import (
    STATIC_VERSION as STATIC_VERSION,
    AnyCase as AnyCase,
    AnyState as AnyState,
    Baseline as Baseline,
    DerivedRequests as DerivedRequests,
    Done as Done,
    ETagValidator as ETagValidator,
    ExplicitMutator as ExplicitMutator,
    FullContent as FullContent,
    Headers as Headers,
    LastModifiedValidator as LastModifiedValidator,
    MethodNotAllowedCheck as MethodNotAllowedCheck,
    MissingDocumentCheck as MissingDocumentCheck,
    Mutate as Mutate,
    NotModified as NotModified,
    PassiveMutator as PassiveMutator,
    PathFlags as PathFlags,
    Phase as Phase,
    PreconditionFailed as PreconditionFailed,
    Preconditions as Preconditions,
    Request as Request,
    ResourceState as ResourceState,
    Response as Response,
    RevalidateModified as RevalidateModified,
    RevalidateSame as RevalidateSame,
    Scenario as Scenario,
    State as State,
    StaticDocumentCheck as StaticDocumentCheck,
    ValidateModified as ValidateModified,
    ValidateSame as ValidateSame,
    ValidationChannels as ValidationChannels,
    ValidationOutcome as ValidationOutcome,
    Version as Version,
    VersionClock as VersionClock,
    create_baseline as create_baseline,
    current_version as current_version,
    evaluate as evaluate,
)
from revalidate._exceptions import (
    BodyMismatch as BodyMismatch,
    ConfigurationError as ConfigurationError,
    MissingValidator as MissingValidator,
    RevalidateError as RevalidateError,
    ScenarioFailure as ScenarioFailure,
    TransportFailure as TransportFailure,
    UnexpectedStatus as UnexpectedStatus,
)
from revalidate._httpx import ServerTransport as ServerTransport
from revalidate._server import ResourceStore as ResourceStore, ValidationServer as ValidationServer
from revalidate._suite import (
    CaseResult as CaseResult,
    arun_suite as arun_suite,
    default_suite as default_suite,
    run_suite as run_suite,
)
from revalidate._sync._harness import ScenarioRunner as ScenarioRunner

__all__ = (
    # Decision engine
    "Version",
    "VersionClock",
    "STATIC_VERSION",
    "current_version",
    "Preconditions",
    "ValidationChannels",
    "ValidationOutcome",
    "FullContent",
    "NotModified",
    "PreconditionFailed",
    "evaluate",
    ## Models
    "Headers",
    "Request",
    "Response",
    "PathFlags",
    "ResourceState",
    # Target server
    "ServerOptions",
    "ValidationServer",
    "ResourceStore",
    "ServerTransport",
    # Harness
    ## Cases
    "AnyCase",
    "Scenario",
    "MissingDocumentCheck",
    "StaticDocumentCheck",
    "MethodNotAllowedCheck",
    "ETagValidator",
    "LastModifiedValidator",
    "ExplicitMutator",
    "PassiveMutator",
    "DerivedRequests",
    ## States
    "AnyState",
    "State",
    "Phase",
    "Baseline",
    "ValidateSame",
    "ValidateModified",
    "Mutate",
    "RevalidateModified",
    "RevalidateSame",
    "Done",
    "create_baseline",
    ## Runners
    "HarnessOptions",
    "AsyncScenarioRunner",
    "ScenarioRunner",
    "CaseResult",
    "default_suite",
    "arun_suite",
    "run_suite",
    # Errors
    "RevalidateError",
    "ConfigurationError",
    "ScenarioFailure",
    "UnexpectedStatus",
    "BodyMismatch",
    "MissingValidator",
    "TransportFailure",
)
