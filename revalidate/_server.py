from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from typing_extensions import assert_never

from revalidate._config import ServerOptions
from revalidate._core._headers import Headers
from revalidate._core._render import CONTENT_TYPE, HELP_TEXT, render_body
from revalidate._core._spec import (
    FullContent,
    NotModified,
    PreconditionFailed,
    Preconditions,
    ValidationChannels,
    evaluate,
)
from revalidate._core._versions import Version, VersionClock
from revalidate._core.models import PathFlags, Request, ResourceState, Response
from revalidate._utils import BaseClock

logger = logging.getLogger("revalidate.server")

SUPPORTED_METHODS = ("GET", "PUT")


class ResourceStore:
    """
    Per-path record of explicit mutations.

    The version of a path is the clock version raised to the last mutation
    recorded for that exact path, so versions never go backwards. A record
    is dropped once the clock version has caught up with it, so the store
    only holds paths mutated within roughly the last granularity window.
    """

    def __init__(self, clock: VersionClock) -> None:
        self._clock = clock
        self._mutations: Dict[str, Version] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._mutations)

    def state(self, path: str, flags: PathFlags, now: float) -> ResourceState:
        version = self._clock.current(flags.static, now=now)
        if not flags.static:
            with self._lock:
                mutated = self._mutations.get(path)
            if mutated is not None and mutated > version:
                version = mutated
        return ResourceState(version=version, is_static=flags.static)

    def mutate(self, path: str, flags: PathFlags, now: float) -> Version:
        """Record a mutation; the resulting version is strictly newer than the current one."""
        with self._lock:
            current = self._clock.current(flags.static, now=now)
            self._prune(self._clock.current(False, now=now))
            previous = self._mutations.get(path)
            if previous is not None and previous > current:
                current = previous
            updated = max(Version(int(now)), current.successor())
            self._mutations[path] = updated
        return updated

    def _prune(self, clock_version: Version) -> None:
        # Clock versions only grow, so an overtaken record can never win again
        stale = [path for path, version in self._mutations.items() if version <= clock_version]
        for path in stale:
            del self._mutations[path]
        if stale:
            logger.debug("Dropped %d overtaken mutation records", len(stale))


class ValidationServer:
    """
    A server for exactly one mutable document per path.

    The document is "regenerated" every granularity window. Literal path
    segments choose its behaviour, see ``PathFlags``.
    """

    def __init__(self, options: Optional[ServerOptions] = None, clock: Optional[BaseClock] = None) -> None:
        self.options = options if options is not None else ServerOptions()
        self.clock = VersionClock(self.options.granularity, clock=clock, static_version=self.options.static_version)
        self.store = ResourceStore(self.clock)

    def handle(self, request: Request) -> Response:
        response = self._dispatch(request)
        logger.info("%s %s -> %d", request.method, request.url, response.status_code)
        return response

    def _dispatch(self, request: Request) -> Response:
        if request.method not in SUPPORTED_METHODS:
            return self._error(405, "Only GET and PUT requests supported", Allow=", ".join(SUPPORTED_METHODS))

        path = request.path
        if path == "/" and request.method == "GET":
            return self._text(200, HELP_TEXT)

        flags = PathFlags.from_path(path)
        if not flags.recognized:
            return self._error(410, "No document lives at this path")

        now = self.clock.now()

        if request.method == "PUT":
            if not flags.mutable:
                return self._error(405, "Document cannot be updated", Allow="GET")
            updated = self.store.mutate(path, flags, now)
            logger.debug("Document %s updated to %s", path, updated.last_modified)
            return Response(status_code=204)

        state = self.store.state(path, flags, now)
        outcome = evaluate(
            state.version,
            Preconditions.from_headers(request.headers),
            ValidationChannels(etag=flags.etag, last_modified=flags.last_modified),
        )

        if isinstance(outcome, PreconditionFailed):
            logger.debug("Precondition failed for %s: %s", path, outcome.reason)
            return self._error(412, outcome.reason)
        elif isinstance(outcome, NotModified):
            logger.debug("Not modified %s: %s", path, outcome.reason)
            return Response(status_code=304)
        elif isinstance(outcome, FullContent):
            body = render_body(outcome.version, now, request.headers if flags.headers else None)
            response = self._text(200, body)
            for key, value in outcome.headers.items():
                response.headers[key] = value
            return response
        else:
            assert_never(outcome)

    def _text(self, status_code: int, text: str, **extra_headers: str) -> Response:
        content = text.encode("utf-8")
        headers = Headers({"Content-Type": CONTENT_TYPE, "Content-Length": str(len(content))})
        for key, value in extra_headers.items():
            headers[key] = value
        return Response(status_code=status_code, headers=headers, content=content)

    def _error(self, status_code: int, message: str, **extra_headers: str) -> Response:
        return self._text(status_code, message + "\n", **extra_headers)
