"""
Request construction for a classified identifier
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import quote

from .config import PLACEHOLDER, Source

# Characters that identifiers legitimately contain and servers expect verbatim
# (arXiv legacy ids, IACR ``year/number``, DOIs).
SAFE_CHARACTERS = "/:."


@dataclass(frozen=True)
class Request:
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


def build_request(source: Source, identifier: str) -> Request:
    url = source.endpoint_template.replace(
        PLACEHOLDER, quote(identifier, safe=SAFE_CHARACTERS)
    )
    return Request(url=url, headers=dict(source.headers))
