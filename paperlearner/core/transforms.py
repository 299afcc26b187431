"""
Value transforms declared on field maps
"""
from __future__ import annotations

import re
from datetime import date, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Iterable, Optional, Sequence

from .config import (
    CombineTransform,
    DateParseTransform,
    ReplaceTransform,
    Transform,
    UrlComposeTransform,
)
from .errors import TransformError, UnparseableDate

TEXT_KEY = "#text"


def clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def scalar_text(value: Any) -> str:
    """Render an extracted value as text.

    XML elements that carry attributes arrive as mappings; their character
    data lives under ``#text``.
    """
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict) and TEXT_KEY in value:
        return scalar_text(value[TEXT_KEY])
    raise TransformError(f"expected a text value, got {type(value).__name__}")


def apply_transform(value: Any, transform: Optional[Transform]) -> Any:
    """Apply ``transform`` to one extracted value."""
    if transform is None:
        return value

    if isinstance(transform, ReplaceTransform):
        text = scalar_text(value)
        try:
            return transform.regex.sub(transform.template, text, count=1)
        except (re.error, IndexError) as exc:
            raise TransformError(f"replacement failed: {exc}") from exc

    if isinstance(transform, UrlComposeTransform):
        text = scalar_text(value)
        if "{value}" in transform.base:
            return transform.base.replace("{value}", text) + transform.suffix
        return f"{transform.base}{text}{transform.suffix}"

    if isinstance(transform, DateParseTransform):
        return parse_date(scalar_text(value), transform.hints)

    if isinstance(transform, CombineTransform):
        return _combine(value, transform.fields, transform.separator)

    raise TransformError(f"unsupported transform: {type(transform).__name__}")


def parse_date(text: str, hints: Sequence[str] = ()) -> date:
    """Parse ``text`` using ``hints`` first, then ISO-8601 and RFC-2822 layouts."""
    value = clean_text(text)
    if not value:
        raise UnparseableDate(text)

    for fmt in hints:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(value).date()
    except (TypeError, ValueError, IndexError):
        pass

    raise UnparseableDate(text)


def _combine(value: Any, fields: Iterable[str], separator: str) -> str:
    if not isinstance(value, dict):
        raise TransformError(f"combine expects a mapping, got {type(value).__name__}")
    parts = []
    for key in fields:
        if key not in value or value[key] is None:
            continue
        part = scalar_text(value[key])
        if part:
            parts.append(part)
    if not parts:
        raise TransformError(f"none of {', '.join(fields)} present in value")
    return separator.join(parts)
