"""Core API object: content formats, transformers and middleware."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from huma.chain import Middleware, Middlewares

Transformer = Callable[[Any, str, Any], Any]
CreateHook = Callable[["Config"], "Config"]


class UnknownContentTypeError(ValueError):
    """Raised when no format is registered for a content type."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"unknown content type: {content_type}")
        self.content_type = content_type


@dataclass(frozen=True)
class ProtoVersion:
    """The HTTP protocol version as text and as numbers."""

    proto: str = ""
    proto_major: int = 0
    proto_minor: int = 0


@dataclass(frozen=True)
class Format:
    """A request/response format able to marshal and unmarshal values."""

    marshal: Callable[[Any], bytes]
    unmarshal: Callable[[bytes], Any]


def _json_marshal(value: Any) -> bytes:
    return json.dumps(value).encode()


def _json_unmarshal(data: bytes) -> Any:
    return json.loads(data)


def json_format() -> Format:
    """Return a format that reads and writes JSON."""
    return Format(marshal=_json_marshal, unmarshal=_json_unmarshal)


@dataclass
class Config:
    """Settings for a new API.

    ``default_format`` is the content type used when the client asks for none;
    it falls back to ``application/json`` when that format is registered.
    ``create_hooks`` may rewrite the configuration when the API is created.
    """

    formats: dict[str, Format] = field(default_factory=dict)
    default_format: str = ""
    transformers: list[Transformer] = field(default_factory=list)
    create_hooks: list[CreateHook] = field(default_factory=list)


class API:
    """An API holding formats, response transformers and middleware."""

    def __init__(self, config: Config | None = None) -> None:
        config = replace(config) if config is not None else Config()
        for hook in list(config.create_hooks):
            config = hook(config)

        self.config = config
        self._formats: dict[str, Format] = {}
        self._transformers: list[Transformer] = list(config.transformers)
        self._middlewares = Middlewares()

        if not config.default_format and "application/json" in config.formats:
            config.default_format = "application/json"

        keys: list[str] = []
        if config.default_format:
            keys.append(config.default_format)
        for key, fmt in config.formats.items():
            self._formats[key] = fmt
            keys.append(key)
        self.format_keys: list[str] = keys

    def unmarshal(self, content_type: str, data: bytes) -> Any:
        """Decode ``data`` using the format chosen by the content type.

        Handles values like ``application/json; charset=utf-8`` and
        ``my/format+json``; an empty type is taken to be JSON.
        """
        start = content_type.find("+") + 1
        end = content_type.find(";")
        if end == -1:
            end = len(content_type)
        ct = content_type[start:end] or "application/json"
        fmt = self._formats.get(ct)
        if fmt is None:
            raise UnknownContentTypeError(content_type)
        return fmt.unmarshal(data)

    def marshal(self, content_type: str, value: Any) -> bytes:
        """Encode ``value`` with the format for the content type or its ``+`` suffix."""
        fmt = self._formats.get(content_type)
        if fmt is None:
            start = content_type.find("+") + 1
            fmt = self._formats.get(content_type[start:])
        if fmt is None:
            raise UnknownContentTypeError(content_type)
        return fmt.marshal(value)

    def transform(self, ctx: Any, status: str, value: Any) -> Any:
        """Run every transformer in order on the value and return the result."""
        for transformer in self._transformers:
            value = transformer(ctx, status, value)
        return value

    def use_middleware(self, *middlewares: Middleware) -> None:
        """Append middleware to the API's stack."""
        self._middlewares.extend(middlewares)

    def middlewares(self) -> Middlewares:
        """Return the middleware run for all operations, in order added."""
        return self._middlewares