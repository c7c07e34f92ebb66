"""Conditional requests using If-Match, If-None-Match and the date headers.

A resource's current ETag and last-modified time are checked against the
headers a client sent, so reads can answer ``304 Not Modified`` and writes can
refuse to overwrite someone else's changes with ``412 Precondition Failed``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass
class ErrorDetail:
    """Details of a single failed check: what, where and the offending value."""

    message: str = ""
    location: str = ""
    value: Any = None

    def __str__(self) -> str:
        return f"{self.message} ({self.location}: {self.value})"


class StatusError(Exception):
    """An error carrying an HTTP status code and optional error details."""

    def __init__(
        self, status: int, detail: str = "", errors: list[ErrorDetail] | None = None
    ) -> None:
        self.status = status
        self.title = HTTPStatus(status).phrase
        self.detail = detail
        self.errors = list(errors or [])
        super().__init__(detail or self.title)


def _trim_etag(value: str) -> str:
    if value.startswith("W/") and len(value) > 2:
        value = value[2:]
    return value.strip('"')


def _http_date(moment: datetime | None) -> str:
    if moment is None:
        moment = datetime.min
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{_DAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:"
        f"{moment.second:02d} GMT"
    )


def _after(moment: datetime | None, other: datetime) -> bool:
    return moment is not None and moment > other


@dataclass
class Params:
    """Conditional request headers sent by a client."""

    if_match: list[str] = field(default_factory=list)
    if_none_match: list[str] = field(default_factory=list)
    if_modified_since: datetime | None = None
    if_unmodified_since: datetime | None = None
    # Writes fail with 412 and details; reads answer 304.
    _is_write: bool = field(default=False, repr=False)

    def resolve(self, method: str) -> None:
        """Note whether the request method is a write."""
        if method.upper() in _WRITE_METHODS:
            self._is_write = True

    def has_conditional_params(self) -> bool:
        """Return True if any conditional header was sent."""
        return bool(
            self.if_match
            or self.if_none_match
            or self.if_modified_since is not None
            or self.if_unmodified_since is not None
        )

    def check(self, etag: str = "", modified: datetime | None = None) -> None:
        """Raise StatusError if the preconditions fail for this resource state.

        Reads raise a 304 error, writes a 412 error listing each failure.
        """
        failed = False
        errors: list[ErrorDetail] = []
        found = f"found resource with ETag {etag}" if etag else "found no existing resource"

        for match in self.if_none_match:
            trimmed = _trim_etag(match)
            if trimmed == etag or (trimmed == "*" and etag != ""):
                if self._is_write:
                    errors.append(
                        ErrorDetail(
                            message=f"If-None-Match: {match} precondition failed, {found}",
                            location="headers.If-None-Match",
                            value=match,
                        )
                    )
                failed = True

        if self.if_match and not any(_trim_etag(m) == etag for m in self.if_match):
            if self._is_write:
                errors.append(
                    ErrorDetail(
                        message=f"If-Match precondition failed, {found}",
                        location="headers.If-Match",
                        value=list(self.if_match),
                    )
                )
            failed = True

        since = self.if_modified_since
        if since is not None and not _after(modified, since):
            if self._is_write:
                errors.append(
                    ErrorDetail(
                        message=(
                            f"If-Modified-Since: {_http_date(since)} precondition failed, "
                            f"resource was modified at {_http_date(modified)}"
                        ),
                        location="headers.If-Modified-Since",
                        value=_http_date(since),
                    )
                )
            failed = True

        until = self.if_unmodified_since
        if until is not None and _after(modified, until):
            if self._is_write:
                errors.append(
                    ErrorDetail(
                        message=(
                            f"If-Unmodified-Since: {_http_date(until)} precondition failed, "
                            f"resource was modified at {_http_date(modified)}"
                        ),
                        location="headers.If-Unmodified-Since",
                        value=_http_date(until),
                    )
                )
            failed = True

        if failed:
            if self._is_write:
                raise StatusError(
                    HTTPStatus.PRECONDITION_FAILED,
                    HTTPStatus.PRECONDITION_FAILED.phrase,
                    errors,
                )
            raise StatusError(HTTPStatus.NOT_MODIFIED)