from __future__ import annotations

from typing import Union, overload

import httpx

from revalidate._core._headers import Headers
from revalidate._core.models import Request, Response
from revalidate._server import ValidationServer


@overload
def _internal_to_httpx(
    value: Request,
) -> httpx.Request: ...
@overload
def _internal_to_httpx(
    value: Response,
) -> httpx.Response: ...
def _internal_to_httpx(
    value: Union[Request, Response],
) -> Union[httpx.Request, httpx.Response]:
    """
    Convert internal Request/Response to httpx.Request/httpx.Response.
    """
    if isinstance(value, Request):
        return httpx.Request(
            method=value.method,
            url=value.url,
            headers=value.headers.multi_items(),
            content=value.content,
        )
    elif isinstance(value, Response):
        return httpx.Response(
            status_code=value.status_code,
            headers=value.headers.multi_items(),
            content=value.content,
        )


@overload
def _httpx_to_internal(
    value: httpx.Request,
) -> Request: ...
@overload
def _httpx_to_internal(
    value: httpx.Response,
) -> Response: ...
def _httpx_to_internal(
    value: Union[httpx.Request, httpx.Response],
) -> Union[Request, Response]:
    """
    Convert httpx.Request/httpx.Response to internal Request/Response.

    The body must already be read.
    """
    headers = Headers({})
    for key, val in value.headers.multi_items():
        headers[key] = val

    if isinstance(value, httpx.Request):
        return Request(
            method=value.method,
            url=str(value.url),
            headers=headers,
            content=value.content,
        )
    elif isinstance(value, httpx.Response):
        return Response(
            status_code=value.status_code,
            headers=headers,
            content=value.content,
        )


class ServerTransport(httpx.BaseTransport, httpx.AsyncBaseTransport):
    """
    An httpx transport answering every request from an in-process server.

    Works for both ``httpx.Client`` and ``httpx.AsyncClient``; no socket is
    opened.
    """

    def __init__(self, server: ValidationServer) -> None:
        self.server = server

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        request.read()
        return self._respond(request)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        return self._respond(request)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        response = self.server.handle(_httpx_to_internal(request))
        return _internal_to_httpx(response)
