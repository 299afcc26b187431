"""
Assemble extracted field values into a canonical Paper
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from .config import FieldMap, Source
from .errors import MissingField, TransformError, TransformFailed
from .extractor import extract
from .models import CANONICAL_FIELDS, Paper
from .transforms import apply_transform, parse_date, scalar_text

__all__ = ["CANONICAL_FIELDS", "normalize"]


def normalize(document: Any, source: Source, identifier: str) -> Paper:
    """
    Build a Paper from a parsed response.

    Either every required field resolves or an ExtractionError is raised;
    a partially filled Paper is never returned. Empty strings count as
    missing values.

    Raises:
        MissingField: A required field has no value
        TransformFailed: A present value could not be transformed
    """
    values: Dict[str, Any] = {}
    for name, field_map in source.response_format.field_maps.items():
        policy = CANONICAL_FIELDS[name]
        resolved = _resolve_field(document, name, field_map)
        if policy.multiple:
            values[name] = resolved
        else:
            values[name] = resolved[0] if resolved else None

    for name, policy in CANONICAL_FIELDS.items():
        if policy.required and not values.get(name):
            raise MissingField(name)

    return Paper(
        source=source.source_name,
        identifier=identifier,
        title=values["title"],
        authors=values["authors"],
        abstract=values.get("abstract") or "",
        publication_date=values["publication_date"],
        pdf_url=values.get("pdf_url"),
        doi=values.get("doi"),
    )


def _resolve_field(document: Any, name: str, field_map: FieldMap) -> List[Any]:
    resolved = []
    for raw in extract(document, field_map.path):
        try:
            value = _coerce(name, apply_transform(raw, field_map.transform))
        except TransformError as exc:
            if _is_blank(raw):
                continue
            raise TransformFailed(name, exc) from exc
        if value == "" or value is None:
            continue
        resolved.append(value)
        if not CANONICAL_FIELDS[name].multiple:
            break
    return resolved


def _coerce(name: str, value: Any) -> Any:
    if name == "publication_date":
        if isinstance(value, date):
            return value
        text = scalar_text(value)
        return parse_date(text) if text else ""
    return scalar_text(value)


def _is_blank(raw: Any) -> bool:
    return isinstance(raw, str) and not raw.strip()
