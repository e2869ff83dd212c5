"""
HTTP header containers and entity-tag parsing.

Entity tags follow RFC 7232 Section 2.3:

    entity-tag = [ weak ] opaque-tag
    weak       = %x57.2F ; "W/", case-sensitive
    opaque-tag = DQUOTE *etagc DQUOTE
    etagc      = %x21 / %x23-7E / obs-text
"""

from __future__ import annotations

from typing import (
    Any,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

WEAK_PREFIX = "W/"


def is_etagc(c: str) -> bool:
    """Check if ``c`` may appear between the quotes of an entity-tag."""
    b = ord(c)
    return b == 0x21 or 0x23 <= b <= 0x7E or b >= 0x80


def quote_etag(opaque: str) -> str:
    """
    Build a strong entity-tag from its opaque value.

    Examples:
        >>> quote_etag("2012-12-20,20:12:12")
        '"2012-12-20,20:12:12"'
    """
    return f'"{opaque}"'


def unquote_etag(value: str) -> Optional[str]:
    """
    Return the opaque value of an entity-tag, or None when it is malformed.

    The weak indicator is accepted and dropped. There are no escapes inside
    an entity-tag, so anything after the closing quote makes it malformed.

    Examples:
        >>> unquote_etag('"abc"')
        'abc'
        >>> unquote_etag('W/"abc"')
        'abc'
        >>> unquote_etag('abc') is None
        True
    """
    value = value.strip()
    if value.startswith(WEAK_PREFIX):
        value = value[len(WEAK_PREFIX) :]
    if len(value) < 2 or value[0] != '"' or value[-1] != '"':
        return None
    opaque = value[1:-1]
    if not all(is_etagc(c) for c in opaque):
        return None
    return opaque


class Headers(MutableMapping[str, str]):
    def __init__(self, headers: Mapping[str, Union[str, List[str]]]) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else v[:]) for k, v in headers.items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def get_first(self, key: str) -> Optional[str]:
        values = self._headers.get(key.lower())
        return values[0] if values else None

    def multi_items(self) -> List[Tuple[str, str]]:
        """One ``(name, value)`` pair per field line, repeated names included."""
        return [(key, value) for key, values in self._headers.items() for value in values]

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers  # type: ignore
