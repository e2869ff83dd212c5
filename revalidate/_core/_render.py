from __future__ import annotations

from typing import Optional

from revalidate._core._headers import Headers
from revalidate._core._versions import Version
from revalidate._utils import canonical_header_name, format_http_date

CONTENT_TYPE = "text/plain; charset=utf-8"

HELP_TEXT = """
USAGE: You can go to any URL and get some basic content.

If the following components are present in the path URL, then you will
get some additional behaviour:
  /lastmod/ -> Sets a Last-Modified header and performs date resource validation.
               (/datemod/ is accepted as an alias.)
  /etag/ -> Sets an ETag header and performs ETag resource validation.
  /headers/ -> Includes the request headers in the content response.
  /static/ -> Uses a fixed timestamp rather than an updating one.
  /clock/ -> Accepts PUT requests, which update the document immediately.
  /periodic/ -> Plain document, updated every granularity window.

Paths containing none of these components are gone (410).

You can combine the path components too:
  /resource/headers/static/blahblah/etag/anythingyoulike/
"""


def render_body(version: Version, now: float, request_headers: Optional[Headers] = None) -> str:
    """
    Render the document for ``version`` as generated at ``now``.

    The first line names the content version and is what clients compare
    to decide whether two responses carry the same document. The second
    line changes on every request.
    """
    lines = [
        f"Content date: {version.last_modified}",
        f"Generated:    {format_http_date(now)}",
    ]

    if request_headers is not None:
        lines.append("")
        lines.append("REQUEST HEADERS:")
        for name in sorted(canonical_header_name(key) for key in request_headers):
            lines.append(f"  {name}: {request_headers.get_first(name)}")

    return "\n".join(lines) + "\n"
