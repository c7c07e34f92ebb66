"""A small HTTP router with named parameters, wildcards and route groups.

Patterns are split on ``/``. A segment such as ``:name`` captures a path
parameter, ``:name|regexp`` only matches when the regular expression finds a
match in the unescaped value, and a trailing ``/...`` captures the rest of the
path under the parameter name ``...``.

Handlers are called as ``handler(request, response)`` and middleware are
callables taking a handler and returning a new handler.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field, replace
from typing import Callable
from urllib.parse import unquote_to_bytes

ALL_METHODS = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
)

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass
class Request:
    """An incoming request: method, escaped path, headers and matched params."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    query: str = ""
    params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if "?" in self.path:
            self.path, _, query = self.path.partition("?")
            if not self.query:
                self.query = query


@dataclass
class Response:
    """The response being built by a handler."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    _wrote_header: bool = field(default=False, repr=False, compare=False)

    def write_header(self, status: int) -> None:
        """Set the status code; only the first call has any effect."""
        if not self._wrote_header:
            self.status = status
            self._wrote_header = True

    def write(self, data: bytes | str) -> None:
        """Append data to the body, fixing the status if not yet written."""
        if isinstance(data, str):
            data = data.encode()
        self._wrote_header = True
        self.body += data


Handler = Callable[[Request, Response], None]
Middleware = Callable[[Handler], Handler]


def param(request: Request, name: str) -> str:
    """Return the value of a matched parameter or wildcard, or ``""``."""
    return request.params.get(name, "")


def _error(response: Response, message: str, status: int) -> None:
    response.headers.pop("Content-Length", None)
    response.headers["Content-Type"] = "text/plain; charset=utf-8"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.write_header(status)
    response.write(message + "\n")


def _not_found(request: Request, response: Response) -> None:
    _error(response, "404 page not found", 404)


def _method_not_allowed(request: Request, response: Response) -> None:
    _error(response, "Method Not Allowed", 405)


def _options(request: Request, response: Response) -> None:
    response.write_header(204)


def _query_unescape(value: str) -> str | None:
    if _BAD_ESCAPE.search(value):
        return None
    return unquote_to_bytes(value.replace("+", " ")).decode("utf-8", errors="replace")


@dataclass
class _Segment:
    text: str
    key: str = ""
    pattern: re.Pattern[str] | None = None

    @property
    def is_param(self) -> bool:
        return self.text.startswith(":")


def _parse_segment(text: str) -> _Segment:
    if not text.startswith(":"):
        return _Segment(text)
    key, has_rx, rx = text[1:].partition("|")
    return _Segment(text, key, re.compile(rx) if has_rx else None)


@dataclass
class _Route:
    method: str
    segments: list[_Segment]
    wildcard: bool
    handler: Handler

    def match(self, url_segments: list[str]) -> dict[str, str] | None:
        if not self.wildcard and len(url_segments) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for i, segment in enumerate(self.segments):
            if i >= len(url_segments):
                return None

            if segment.text == "...":
                params["..."] = "/".join(url_segments[i:])
                return params

            if segment.is_param:
                value = _query_unescape(url_segments[i])
                if value is None:
                    return None
                if segment.pattern is not None:
                    if segment.pattern.search(value):
                        params[segment.key] = value
                        continue
                elif value != "":
                    params[segment.key] = value
                    continue
                return None

            if url_segments[i] != segment.text:
                return None

        return params


class Mux:
    """Dispatches requests to the handler whose pattern and method match."""

    def __init__(self) -> None:
        self.not_found: Handler = _not_found
        self.method_not_allowed: Handler = _method_not_allowed
        self.options: Handler = _options
        self._routes: list[_Route] = []
        self._middlewares: list[Middleware] = []

    def handle(self, pattern: str, handler: Handler, *methods: str) -> None:
        """Register ``handler`` for the pattern and methods (all if none given).

        Registering GET also registers HEAD.
        """
        chosen = list(methods)
        if "GET" in chosen and "HEAD" not in chosen:
            chosen.append("HEAD")
        if not chosen:
            chosen = list(ALL_METHODS)

        raw_segments = pattern.split("/")
        segments = [_parse_segment(s) for s in raw_segments]
        wrapped = self._wrap(handler)
        wildcard = pattern.endswith("/...")
        for method in chosen:
            self._routes.append(_Route(method.upper(), segments, wildcard, wrapped))

    def use(self, *middlewares: Middleware) -> None:
        """Add middleware for routes registered after this call."""
        self._middlewares.extend(middlewares)

    def group(self, fn: Callable[[Mux], None]) -> None:
        """Call ``fn`` with a mux sharing routes but with its own middleware."""
        sub = copy.copy(self)
        sub._middlewares = list(self._middlewares)
        fn(sub)

    def serve(self, request: Request) -> Response:
        """Dispatch the request and return the response produced."""
        response = Response()
        url_segments = request.path.split("/")
        allowed: list[str] = []

        for route in self._routes:
            params = route.match(url_segments)
            if params is None:
                continue
            if request.method == route.method:
                matched = replace(request, params={**request.params, **params})
                route.handler(matched, response)
                return response
            if route.method not in allowed:
                allowed.append(route.method)

        if allowed:
            response.headers["Allow"] = ", ".join([*allowed, "OPTIONS"])
            if request.method == "OPTIONS":
                self._wrap(self.options)(request, response)
            else:
                self._wrap(self.method_not_allowed)(request, response)
            return response

        self._wrap(self.not_found)(request, response)
        return response

    def _wrap(self, handler: Handler) -> Handler:
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)
        return handler