"""Reading cookies from request ``Cookie`` headers."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Tuple, Union

Headers = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~" + string.digits + string.ascii_letters)
_HEADER_WS = " \t\n\r"


@dataclass(frozen=True)
class Cookie:
    """A cookie name and value sent by a client."""

    name: str
    value: str


class NoCookieError(LookupError):
    """Raised when a named cookie is not present in the request."""

    def __init__(self, name: str) -> None:
        super().__init__(f"http: named cookie not present: {name}")
        self.name = name


def _header_pairs(headers: Headers) -> Iterator[Tuple[str, str]]:
    if isinstance(headers, Mapping):
        return iter(headers.items())
    return iter(headers)


def _cookie_lines(headers: Headers) -> list[str]:
    return [value for name, value in _header_pairs(headers) if name.lower() == "cookie"]


def _is_cookie_name_valid(raw: str) -> bool:
    return bool(raw) and all(c in _TOKEN_CHARS for c in raw)


def _valid_value_char(c: str) -> bool:
    return 0x20 <= ord(c) < 0x7F and c not in '";\\'


def _parse_cookie_value(raw: str) -> str | None:
    if len(raw) > 1 and raw[0] == '"' and raw[-1] == '"':
        raw = raw[1:-1]
    if all(_valid_value_char(c) for c in raw):
        return raw
    return None


def _parse_cookies(lines: Iterable[str], only: str = "") -> Iterator[Cookie]:
    for line in lines:
        for part in line.strip(_HEADER_WS).split(";"):
            part = part.strip(_HEADER_WS)
            if not part:
                continue
            name, _, raw = part.partition("=")
            name = name.strip(_HEADER_WS)
            if not _is_cookie_name_valid(name):
                continue
            if only and only != name:
                continue
            value = _parse_cookie_value(raw)
            if value is None:
                continue
            yield Cookie(name, value)


def read_cookie(headers: Headers, name: str) -> Cookie:
    """Return the first cookie called ``name``; raise NoCookieError if absent."""
    for cookie in _parse_cookies(_cookie_lines(headers), name):
        return cookie
    raise NoCookieError(name)


def read_cookies(headers: Headers) -> list[Cookie]:
    """Return every valid cookie found in the ``Cookie`` headers."""
    return list(_parse_cookies(_cookie_lines(headers)))