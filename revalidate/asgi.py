from __future__ import annotations

import logging
import typing as t
from typing import Optional

from revalidate._core._headers import Headers
from revalidate._core.models import Request, Response
from revalidate._server import ValidationServer
from revalidate._utils import HEADERS_ENCODING

logger = logging.getLogger(__name__)


class _ASGIScope(t.TypedDict, total=False):
    """ASGI HTTP scope type."""

    type: str
    asgi: dict[str, str]
    http_version: str
    method: str
    scheme: str
    path: str
    query_string: bytes
    root_path: str
    headers: list[tuple[bytes, bytes]]
    server: tuple[str, int | None] | None
    client: tuple[str, int] | None
    state: dict[str, t.Any]
    extensions: dict[str, t.Any]


_Scope = _ASGIScope
_Receive = t.Callable[[], t.Awaitable[dict[str, t.Any]]]
_Send = t.Callable[[dict[str, t.Any]], t.Awaitable[None]]


class ValidationApp:
    """
    ASGI application serving a ``ValidationServer``.

    Request bodies are read and discarded; responses are sent in one chunk
    with the Content-Length the server computed.

    Example:
        ```python
        import uvicorn

        from revalidate.asgi import ValidationApp

        uvicorn.run(ValidationApp(), host="localhost", port=20752)
        ```
    """

    def __init__(self, server: Optional[ValidationServer] = None) -> None:
        self.server = server if server is not None else ValidationServer()

        logger.info(
            "Initialized ValidationApp with granularity=%d",
            self.server.options.granularity,
        )

    async def __call__(self, scope: _Scope, receive: _Receive, send: _Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        if scope["type"] != "http":
            logger.debug("Skipping non-HTTP request: type=%s", scope["type"])
            return

        request = await self._asgi_to_internal_request(scope, receive)
        logger.debug("Converted ASGI request to internal format: url=%s", request.url)

        try:
            response = self.server.handle(request)
        except Exception as e:
            logger.error(
                "Error processing request: method=%s url=%s error=%s",
                request.method,
                request.url,
                str(e),
                exc_info=True,
            )
            raise

        await self._send_internal_response(response, send)

    async def _lifespan(self, receive: _Receive, send: _Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _asgi_to_internal_request(self, scope: _Scope, receive: _Receive) -> Request:
        path = scope.get("path", "/")
        query_string = scope.get("query_string", b"")
        if query_string:
            path = f"{path}?{query_string.decode(HEADERS_ENCODING)}"

        headers = Headers({})
        for key, value in scope.get("headers", []):
            headers[key.decode(HEADERS_ENCODING)] = value.decode(HEADERS_ENCODING)

        body = b""
        while True:
            message = await receive()
            if message["type"] == "http.request":
                body += message.get("body", b"")
                if not message.get("more_body", False):
                    break
            elif message["type"] == "http.disconnect":
                logger.debug("Client disconnected during request body streaming")
                break

        return Request(
            method=scope.get("method", "GET"),
            url=path,
            headers=headers,
            content=body,
        )

    async def _send_internal_response(self, response: Response, send: _Send) -> None:
        headers: list[tuple[bytes, bytes]] = [
            (key.encode(HEADERS_ENCODING), value.encode(HEADERS_ENCODING)) for key, value in response.headers.multi_items()
        ]

        await send(
            {
                "type": "http.response.start",
                "status": response.status_code,
                "headers": headers,
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": response.content,
                "more_body": False,
            }
        )
        logger.debug(
            "Response sent: status=%d total_bytes=%d",
            response.status_code,
            len(response.content),
        )
