"""
paperlearner - Build a local library of academic papers

This package resolves paper identifiers and URLs to a configured source,
fetches the source's metadata record, normalizes it into a canonical
Paper, and stores it in a searchable local library.
"""

__author__ = "paperlearner contributors"
__license__ = "MIT"

from .config import Source, load_source_file
from .errors import (
    ConfigError,
    DocumentError,
    ExtractionError,
    FetchError,
    MalformedResponse,
    MissingField,
    NoMatchingSource,
    RequestFailed,
    RequestTimeout,
    RetrieverError,
    TransformError,
    TransformFailed,
    UnparseableDate,
)
from .library import Library
from .models import Paper
from .registry import Registry, load_registry
from .retriever import Retriever

__all__ = [
    "ConfigError",
    "DocumentError",
    "ExtractionError",
    "FetchError",
    "Library",
    "MalformedResponse",
    "MissingField",
    "NoMatchingSource",
    "Paper",
    "Registry",
    "RequestFailed",
    "RequestTimeout",
    "Retriever",
    "RetrieverError",
    "Source",
    "TransformError",
    "TransformFailed",
    "UnparseableDate",
    "load_registry",
    "load_source_file",
]
