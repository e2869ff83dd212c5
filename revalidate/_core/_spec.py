"""
Conditional-request evaluation (RFC 7232) for a single versioned resource.

The evaluation is a pure function of the resource's current version, the
request preconditions and the validation channels enabled for the
resource. It performs no I/O and never raises: a malformed precondition
value simply does not match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from revalidate._core._headers import Headers
from revalidate._core._versions import Version

logger = logging.getLogger("revalidate.core.spec")

WILDCARD = "*"


@dataclass(frozen=True)
class Preconditions:
    """
    Request-scoped precondition values.

    Each attribute is either None (header absent) or the single raw value
    the client sent. An empty header value counts as absent.
    """

    if_match: Optional[str] = None
    if_none_match: Optional[str] = None
    if_modified_since: Optional[str] = None
    if_unmodified_since: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Headers) -> "Preconditions":
        def single(name: str) -> Optional[str]:
            # Only the first field line is considered
            value = headers.get_first(name)
            return value if value else None

        return cls(
            if_match=single("If-Match"),
            if_none_match=single("If-None-Match"),
            if_modified_since=single("If-Modified-Since"),
            if_unmodified_since=single("If-Unmodified-Since"),
        )


@dataclass(frozen=True)
class ValidationChannels:
    """
    Which validators a resource advertises and honours.

    Attributes:
    ----------
    etag : bool
        Entity-tag channel: ``ETag`` on full responses, ``If-Match`` and
        ``If-None-Match`` on requests.

    last_modified : bool
        Date channel: ``Last-Modified`` on full responses,
        ``If-Unmodified-Since`` and ``If-Modified-Since`` on requests.

    With neither channel enabled every request gets the full response.
    """

    etag: bool = False
    last_modified: bool = False


@dataclass(frozen=True)
class FullContent:
    version: Version
    headers: Dict[str, str] = field(default_factory=dict)
    """Validator headers the response must carry (``ETag`` and/or ``Last-Modified``)."""


@dataclass(frozen=True)
class NotModified:
    reason: str


@dataclass(frozen=True)
class PreconditionFailed:
    reason: str


ValidationOutcome = Union[FullContent, NotModified, PreconditionFailed]


def evaluate(current: Version, preconditions: Preconditions, channels: ValidationChannels) -> ValidationOutcome:
    """
    Decide how to answer a request for a resource at version ``current``.

    RFC 7232 Section 6: Precedence
    https://www.rfc-editor.org/rfc/rfc7232#section-6

    The checks run in a fixed order and the first one that fires decides
    the outcome. This order settles what happens when a client sends
    contradictory headers:

    1. ETag channel, ``If-Match`` present and neither ``*`` nor equal to the
       current tag -> PreconditionFailed
    2. ETag channel, ``If-None-Match`` present and ``*`` or equal to the
       current tag -> NotModified
    3. Date channel, ``If-Unmodified-Since`` present and not equal to the
       current ``Last-Modified`` string -> PreconditionFailed
    4. Date channel, ``If-Modified-Since`` present and not equal to the
       current ``Last-Modified`` string -> NotModified
    5. Otherwise -> FullContent carrying the enabled validators

    Dates are compared as exact strings against the single canonical
    rendering of the current version, not as "before"/"after" instants.
    A client can therefore only ever replay a date it was given. That is
    stricter than RFC 7232 and keeps the outcome deterministic.

    Examples:
    --------
    >>> v = Version(1356034332)
    >>> evaluate(v, Preconditions(if_none_match=v.etag), ValidationChannels(etag=True))
    NotModified(reason='Content matches on If-None-Match')

    >>> evaluate(v, Preconditions(if_match='"other"'), ValidationChannels(etag=True))
    PreconditionFailed(reason='If-Match failed: ETag did not match')

    >>> # Disabled channels are ignored entirely
    >>> evaluate(v, Preconditions(if_match='"other"'), ValidationChannels())
    FullContent(version=Version(timestamp=1356034332), headers={})
    """
    headers: Dict[str, str] = {}

    if channels.etag:
        etag = current.etag

        if preconditions.if_match is not None and preconditions.if_match not in (WILDCARD, etag):
            logger.debug("If-Match %r does not match %r", preconditions.if_match, etag)
            return PreconditionFailed("If-Match failed: ETag did not match")

        if preconditions.if_none_match is not None and preconditions.if_none_match in (WILDCARD, etag):
            logger.debug("If-None-Match %r matches %r", preconditions.if_none_match, etag)
            return NotModified("Content matches on If-None-Match")

        headers["ETag"] = etag

    if channels.last_modified:
        last_modified = current.last_modified

        if preconditions.if_unmodified_since is not None and preconditions.if_unmodified_since != last_modified:
            logger.debug("If-Unmodified-Since %r differs from %r", preconditions.if_unmodified_since, last_modified)
            return PreconditionFailed("Document has been modified")

        if preconditions.if_modified_since is not None and preconditions.if_modified_since != last_modified:
            logger.debug("If-Modified-Since %r differs from %r", preconditions.if_modified_since, last_modified)
            return NotModified("Document has not been modified")

        headers["Last-Modified"] = last_modified

    return FullContent(version=current, headers=headers)
