"""
Identifier classification against registered source patterns
"""
from __future__ import annotations

import logging
from typing import Iterable, Tuple

from .config import Source
from .errors import NoMatchingSource

logger = logging.getLogger(__name__)


def classify(value: str, sources: Iterable[Source]) -> Tuple[Source, str]:
    """
    Find the source an input string belongs to.

    Args:
        value: URL or bare identifier
        sources: Sources in precedence order; the first full match wins

    Returns:
        The matching source and the identifier captured by its pattern

    Raises:
        NoMatchingSource: If no pattern matches
    """
    text = (value or "").strip()
    if not text:
        raise NoMatchingSource(value)

    for source in sources:
        match = source.regex.fullmatch(text)
        if match is None:
            continue
        identifier = match.group(1)
        if not identifier:
            continue
        logger.debug("Classified %r as %s:%s", text, source.name, identifier)
        return source, identifier

    raise NoMatchingSource(value)
