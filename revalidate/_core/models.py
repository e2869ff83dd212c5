from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlsplit

from revalidate._core._headers import Headers
from revalidate._core._versions import Version


@dataclass
class Request:
    method: str
    url: str
    headers: Headers = field(default_factory=lambda: Headers({}))
    content: bytes = b""

    @property
    def path(self) -> str:
        """
        The path component of the URL.

        An origin-form target (``/a/b?q``) is taken literally, so a leading
        ``//`` is part of the path rather than an authority.
        """
        if self.url.startswith("/"):
            return self.url.partition("?")[0]
        return urlsplit(self.url).path or "/"


@dataclass
class Response:
    status_code: int
    headers: Headers = field(default_factory=lambda: Headers({}))
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class PathFlags:
    """
    Behaviour toggles carried by literal path segments.

    A flag is set when ``/<name>/`` occurs anywhere in the path, so segment
    order and the surrounding path text do not matter.
    """

    static: bool = False
    etag: bool = False
    last_modified: bool = False
    headers: bool = False
    clock: bool = False
    periodic: bool = False

    @classmethod
    def from_path(cls, path: str) -> "PathFlags":
        def has(segment: str) -> bool:
            return f"/{segment}/" in path

        return cls(
            static=has("static"),
            etag=has("etag"),
            # "datemod" is the name the usage text has always advertised
            last_modified=has("lastmod") or has("datemod"),
            headers=has("headers"),
            clock=has("clock"),
            periodic=has("periodic"),
        )

    @property
    def recognized(self) -> bool:
        return any((self.static, self.etag, self.last_modified, self.headers, self.clock, self.periodic))

    @property
    def mutable(self) -> bool:
        return self.clock and not self.static


@dataclass(frozen=True)
class ResourceState:
    version: Version
    is_static: bool
