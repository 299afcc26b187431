"""
Path-based value extraction over parsed response documents.

A document is the generic tree produced by ``response_parser``: mappings,
sequences and scalars. A path such as ``feed/entry/author/name`` selects a
named child at every node of the current node set, so repeated elements fan
out and the result is always a flat list in document order.
"""
from __future__ import annotations

import re
from typing import Any, List

_WHITESPACE = re.compile(r"\s")


def split_path(path: str) -> List[str]:
    """Split a field path into segments.

    ``/`` is the primary delimiter; a path without any ``/`` is split on ``.``
    instead, so ``message.title`` and ``message/title`` are equivalent.
    """
    delimiter = "/" if "/" in path else "."
    return path.strip().split(delimiter)


def validate_path(path: str) -> List[str]:
    """Return the segments of ``path`` or raise ``ValueError`` if it is unusable."""
    if not path or not path.strip():
        raise ValueError("path must not be empty")
    segments = split_path(path)
    for segment in segments:
        if not segment:
            raise ValueError(f"path {path!r} contains an empty segment")
        if _WHITESPACE.search(segment):
            raise ValueError(f"path segment {segment!r} contains whitespace")
        if segment.startswith("@") and len(segment) == 1:
            raise ValueError(f"path {path!r} has an attribute segment without a name")
    return segments


def extract(document: Any, path: str) -> List[Any]:
    """Resolve ``path`` against ``document``.

    Returns every matched value in document order; an empty list when the
    path selects nothing. Terminal sequences are flattened into their items
    and ``None`` values are dropped.
    """
    nodes = [document]
    for segment in split_path(path):
        selected: List[Any] = []
        for node in nodes:
            selected.extend(_step(node, segment))
        if not selected:
            return []
        nodes = selected

    values: List[Any] = []
    for node in nodes:
        _flatten_into(node, values)
    return values


def _step(node: Any, segment: str) -> List[Any]:
    if isinstance(node, dict):
        if segment in node:
            return [node[segment]]
        # A single XML element behaves like a one-item sequence.
        if segment == "0":
            return [node]
        return []

    if isinstance(node, list):
        if segment.isdigit():
            index = int(segment)
            return [node[index]] if index < len(node) else []
        selected: List[Any] = []
        for item in node:
            selected.extend(_step(item, segment))
        return selected

    return []


def _flatten_into(node: Any, values: List[Any]) -> None:
    if node is None:
        return
    if isinstance(node, list):
        for item in node:
            _flatten_into(item, values)
        return
    values.append(node)
