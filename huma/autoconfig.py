"""Automatic CLI configuration advertised through the ``x-cli-config`` extension."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AutoConfigVar:
    """A variable the user is prompted for during auto-configuration."""

    description: str = ""
    example: str = ""
    default: Any = None
    enum: list[Any] = field(default_factory=list)
    # Only used in param templates; never sent to the server.
    exclude: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty fields."""
        out: dict[str, Any] = {}
        if self.description:
            out["description"] = self.description
        if self.example:
            out["example"] = self.example
        if self.default is not None:
            out["default"] = self.default
        if self.enum:
            out["enum"] = list(self.enum)
        if self.exclude:
            out["exclude"] = True
        return out


@dataclass
class AutoConfig:
    """An API's automatic configuration settings for a CLI client."""

    security: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    prompt: dict[str, AutoConfigVar] = field(default_factory=dict)
    params: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; ``security`` and ``params`` are always present."""
        out: dict[str, Any] = {"security": self.security}
        if self.headers:
            out["headers"] = dict(self.headers)
        if self.prompt:
            out["prompt"] = {name: var.to_dict() for name, var in self.prompt.items()}
        out["params"] = None if self.params is None else dict(self.params)
        return out