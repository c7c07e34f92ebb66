"""Middleware chains wrapping a final handler."""

from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[Any], None]
Middleware = Callable[[Any, Handler], None]


def _wrap(middleware: Middleware, following: Handler) -> Handler:
    def handle(ctx: Any) -> None:
        middleware(ctx, following)

    return handle


class Middlewares(list):
    """An ordered list of ``middleware(ctx, next)`` callables."""

    def handler(self, endpoint: Handler) -> Handler:
        """Build a handler running every middleware in order, then ``endpoint``."""
        handle = endpoint
        for middleware in reversed(self):
            handle = _wrap(middleware, handle)
        return handle