"""
paperlearner - Build a local library of academic papers

This is the main public API module.
"""

__version__ = "0.1.0"

from .core.errors import RetrieverError
from .core.library import Library
from .core.models import Paper
from .core.registry import Registry, load_registry
from .core.retriever import Retriever

__all__ = [
    "Library",
    "Paper",
    "Registry",
    "Retriever",
    "RetrieverError",
    "load_registry",
]
