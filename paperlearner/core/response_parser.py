"""
Turn raw response bytes into a generic, path-addressable document.

JSON is loaded as-is. XML is converted into the same shape: every element
becomes an entry of its parent mapping, repeated elements become lists,
attributes are stored under ``@name`` and character data of elements that
also carry attributes or children is stored under ``#text``. Leaf elements
without attributes collapse to their text. The root element is the single
key of the returned mapping, so paths start with its name (``feed/entry``).
"""
from __future__ import annotations

import io
import json
import xml.etree.ElementTree as ET
from typing import Any, Dict

from .config import ResponseFormat
from .errors import MalformedResponse
from .transforms import TEXT_KEY


def parse_response(data: bytes, response_format: ResponseFormat) -> Any:
    if response_format.type == "json":
        return parse_json(data)
    return parse_xml(data, strip_namespaces=response_format.strip_namespaces)


def parse_json(data: bytes) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponse("json", str(exc)) from exc


def parse_xml(data: bytes, strip_namespaces: bool = False) -> Dict[str, Any]:
    prefixes: Dict[str, str] = {}
    root = None
    try:
        for event, item in ET.iterparse(io.BytesIO(data), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                prefixes.setdefault(uri, prefix)
            elif root is None:
                root = item
    except ET.ParseError as exc:
        raise MalformedResponse("xml", str(exc)) from exc

    if root is None:
        raise MalformedResponse("xml", "document has no root element")

    namer = _Namer(prefixes, strip_namespaces)
    return {namer(root.tag): _element_value(root, namer)}


class _Namer:
    """Map ElementTree's ``{uri}local`` names back to document names."""

    def __init__(self, prefixes: Dict[str, str], strip: bool):
        self.prefixes = prefixes
        self.strip = strip

    def __call__(self, name: str) -> str:
        if not name.startswith("{"):
            return name
        uri, _, local = name[1:].partition("}")
        if self.strip:
            return local
        prefix = self.prefixes.get(uri, "")
        return f"{prefix}:{local}" if prefix else local


def _element_value(element: ET.Element, namer: _Namer) -> Any:
    children = list(element)
    own_text = (element.text or "") + "".join(child.tail or "" for child in children)

    if not children and not element.attrib:
        return element.text or ""

    value: Dict[str, Any] = {}
    for name, attribute in element.attrib.items():
        value[f"@{namer(name)}"] = attribute

    for child in children:
        if not isinstance(child.tag, str):
            continue
        key = namer(child.tag)
        child_value = _element_value(child, namer)
        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]

    if own_text.strip():
        value[TEXT_KEY] = "".join(element.itertext()) if children else own_text
    return value
