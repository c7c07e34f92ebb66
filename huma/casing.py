"""Split identifiers into words and rejoin them in various casing styles.

``split`` understands CamelCase, snake_case, kebab-case, spaces, numbers and
symbols, so almost any input can be converted to any other casing.
"""

from __future__ import annotations

import enum
import re
import unicodedata
from typing import Callable, Iterable

TransformFunc = Callable[[str], str]

COMMON_INITIALISMS = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS", "RPC",
        "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID",
        "UUID", "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF", "XSS",
        # Media initialisms
        "1080P", "2D", "3D", "4K", "8K", "AAC", "AC3", "CDN", "DASH", "DRM",
        "DVR", "EAC3", "FPS", "GOP", "H264", "H265", "HD", "HLS", "MJPEG",
        "MP2T", "MP3", "MP4", "MPEG2", "MPEG4", "NTSC", "PCM", "RGB", "RGBA",
        "RTMP", "RTP", "SCTE", "SCTE35", "SMPTE", "UPID", "UPIDS", "VOD",
        "YUV420", "YUV422", "YUV444",
    }
)

# Words that attach to a preceding number, e.g. 4K, 100GB, 1080P.
COMMON_SUFFIXES = frozenset({"D", "GB", "K", "KB", "KBPS", "MB", "MPBS", "P", "TB"})

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _State(enum.Enum):
    NONE = enum.auto()
    LOWER = enum.auto()
    FIRST_UPPER = enum.auto()
    UPPER = enum.auto()
    SYMBOL = enum.auto()


def identity(part: str) -> str:
    """Return the part as a plain string with its text unchanged.

    Passing this as the only transform disables the default lower-casing.
    """
    return str(part)


def initialism(part: str) -> str:
    """Upper-case common initialisms such as ID and HTTP."""
    upper = part.upper()
    if upper in COMMON_INITIALISMS:
        return upper
    return part


def _is_upper(c: str) -> bool:
    return unicodedata.category(c) == "Lu"


def _is_lower(c: str) -> bool:
    return unicodedata.category(c) == "Ll"


def _is_letter(c: str) -> bool:
    return unicodedata.category(c).startswith("L")


def _is_punct(c: str) -> bool:
    return unicodedata.category(c).startswith("P")


def split(value: str) -> list[str]:
    """Split a value into words, honouring casing, numbers and symbols.

    >>> split("HTTPServer_2020")
    ['HTTP', 'Server', '2020']
    """
    results: list[str] = []
    start = 0
    state = _State.NONE

    for i, c in enumerate(value):
        if c.isspace() or _is_punct(c):
            if i > start:
                results.append(value[start:i])
            start = i + 1
            state = _State.NONE
            continue

        if state not in (_State.FIRST_UPPER, _State.UPPER) and _is_upper(c):
            if start != i:
                results.append(value[start:i])
                start = i
            state = _State.FIRST_UPPER
        elif state == _State.FIRST_UPPER and _is_upper(c):
            state = _State.UPPER
        elif state != _State.SYMBOL and not _is_letter(c):
            if start != i:
                results.append(value[start:i])
                start = i
            state = _State.SYMBOL
        elif state != _State.LOWER and _is_lower(c):
            if state == _State.UPPER:
                # The last upper-case letter starts the lower-case word.
                if i > 0 and start != i - 1:
                    results.append(value[start : i - 1])
                    start = i - 1
            elif state != _State.FIRST_UPPER:
                if i > 0 and start != i:
                    results.append(value[start:i])
                    start = i
            state = _State.LOWER

    if start < len(value):
        results.append(value[start:])

    return results


def join(parts: Iterable[str], sep: str, *transforms: TransformFunc) -> str:
    """Join parts with ``sep`` after running each through the transforms.

    A part that a transform turns into an empty string is dropped.
    """
    kept: list[str] = []
    for part in parts:
        for transform in transforms:
            part = transform(part)
            if part == "":
                break
        else:
            kept.append(part)
    return sep.join(kept)


def _is_int(part: str) -> bool:
    return bool(_INT_RE.fullmatch(part)) and _INT64_MIN <= int(part) <= _INT64_MAX


def merge_numbers(parts: list[str], *suffixes: str) -> list[str]:
    """Merge number parts with adjacent words, e.g. ``h264`` or ``mp3``.

    Suffixes right-align a number with the following word (``4K`` rather than
    ``4_K``). Without suffixes a common default set is used; pass an empty
    string to disable it.
    """
    lookup = {s.upper() for s in suffixes} if suffixes else COMMON_SUFFIXES
    results: list[str] = []
    prev_num = False
    skip = False

    for i, part in enumerate(parts):
        if skip:
            skip = False
            continue
        if _is_int(part):
            if i < len(parts) - 1 and parts[i + 1].upper() in lookup:
                results.append(part + parts[i + 1])
                skip = True
                continue
            if not prev_num:
                if i == 0:
                    results.append(part)
                else:
                    results[-1] += part
                prev_num = True
                continue
            prev_num = True
        else:
            if i == 1 and prev_num:
                results[0] += part
                prev_num = False
                continue
            prev_num = False
        results.append(part)

    return results


def _title(part: str) -> str:
    """Capitalise the first letter of every word, leaving the rest alone."""
    out = []
    prev_sep = True
    for c in part:
        if prev_sep:
            titled = c.title()
            out.append(titled if len(titled) == 1 else c)
        else:
            out.append(c)
        if ord(c) <= 0x7F:
            prev_sep = not (c.isalnum() or c == "_")
        elif _is_letter(c) or unicodedata.category(c).startswith("N"):
            prev_sep = False
        else:
            prev_sep = c.isspace()
    return "".join(out)


def camel(value: str, *transforms: TransformFunc) -> str:
    """Return a CamelCase version of the value (lower-cased words by default)."""
    chosen = transforms or (str.lower,)
    return join(split(value), "", *chosen, _title)


def lower_camel(value: str, *transforms: TransformFunc) -> str:
    """Return a lowerCamelCase version of the value."""
    result = camel(value, *transforms)
    if not result:
        return result
    return result[0].lower() + result[1:]


def snake(value: str, *transforms: TransformFunc) -> str:
    """Return a snake_case version of the value."""
    chosen = transforms or (str.lower,)
    return join(merge_numbers(split(value)), "_", *chosen)


def kebab(value: str, *transforms: TransformFunc) -> str:
    """Return a kebab-case version of the value."""
    chosen = transforms or (str.lower,)
    return join(merge_numbers(split(value)), "-", *chosen)