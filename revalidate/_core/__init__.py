from revalidate._core._headers import Headers as Headers
from revalidate._core._protocol import (
    AnyCase as AnyCase,
    AnyState as AnyState,
    AnyUpdater as AnyUpdater,
    AnyValidator as AnyValidator,
    Baseline as Baseline,
    DerivedRequests as DerivedRequests,
    Done as Done,
    ETagValidator as ETagValidator,
    ExplicitMutator as ExplicitMutator,
    LastModifiedValidator as LastModifiedValidator,
    MethodNotAllowedCheck as MethodNotAllowedCheck,
    MissingDocumentCheck as MissingDocumentCheck,
    Mutate as Mutate,
    PassiveMutator as PassiveMutator,
    Phase as Phase,
    RevalidateModified as RevalidateModified,
    RevalidateSame as RevalidateSame,
    Scenario as Scenario,
    State as State,
    StaticDocumentCheck as StaticDocumentCheck,
    ValidateModified as ValidateModified,
    ValidateSame as ValidateSame,
    create_baseline as create_baseline,
)
from revalidate._core._spec import (
    FullContent as FullContent,
    NotModified as NotModified,
    PreconditionFailed as PreconditionFailed,
    Preconditions as Preconditions,
    ValidationChannels as ValidationChannels,
    ValidationOutcome as ValidationOutcome,
    evaluate as evaluate,
)
from revalidate._core._versions import (
    STATIC_VERSION as STATIC_VERSION,
    Version as Version,
    VersionClock as VersionClock,
    current_version as current_version,
)
from revalidate._core.models import (
    PathFlags as PathFlags,
    Request as Request,
    ResourceState as ResourceState,
    Response as Response,
)
