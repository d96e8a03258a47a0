import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Human-readable 1024-based size, e.g. ``1.5 KB`` or ``0 Bytes``."""
    if size_bytes <= 0:
        return f"{size_bytes} Bytes"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = size_bytes / 1024**exponent
    return f"{_trim_decimals(value)} {_SIZE_UNITS[exponent]}"


def format_upload_date(moment: datetime) -> str:
    """Short date as ``M/D/YYYY``."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_percent(score: float | None) -> str:
    """Score with one decimal and a percent sign; a missing score reads ``0.0%``."""
    return f"{(score or 0.0):.1f}%"


def capitalize_key(key: str) -> str:
    """Upper-case only the first character: ``currentRole`` -> ``CurrentRole``."""
    return key[:1].upper() + key[1:]


def bullets(lines: Iterable[str], marker: str = "•") -> str:
    """Join lines as a bullet list, one ``marker`` per line."""
    return "\n".join(f"{marker} {line}" for line in lines)


def render_value(value: Any) -> str:
    """Render a key-information value for a lookup reply.

    Lists are comma-joined (objects inside them as compact JSON), objects
    are pretty-printed JSON, scalars are rendered verbatim.
    """
    if isinstance(value, list):
        return ", ".join(
            json.dumps(item) if isinstance(item, dict) else str(item) for item in value
        )
    if isinstance(value, dict):
        return json.dumps(value, indent=2)
    return str(value)


def _trim_decimals(value: float) -> str:
    """Two decimals at most, trailing zeros and dot dropped."""
    return f"{value:.2f}".rstrip("0").rstrip(".")
