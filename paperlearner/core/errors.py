"""
Exception types raised by the retriever engine
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class RetrieverError(RuntimeError):
    """Base class for every error the engine reports to its caller."""


class NoMatchingSource(RetrieverError):
    """Raised when no registered source pattern accepts the input."""

    def __init__(self, value: str):
        self.input = value
        super().__init__(f"No configured source matches: {value!r}")


class ConfigError(RetrieverError):
    """Raised when a source configuration file cannot be loaded."""

    def __init__(self, file: Union[str, Path, None], reason: str):
        self.file = str(file) if file is not None else "<memory>"
        self.reason = reason
        super().__init__(f"{self.file}: {reason}")


class FetchError(RetrieverError):
    """Raised when the network step of a fetch fails."""


class RequestFailed(FetchError):
    """Raised for non-2xx responses and transport failures."""

    def __init__(self, status: Optional[int], url: str = "", detail: str = ""):
        self.status = status
        self.url = url
        message = f"Request failed with status {status}" if status else "Request failed"
        if url:
            message += f": {url}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class RequestTimeout(FetchError):
    """Raised when the per-request deadline expires."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request timed out after {timeout:g}s: {url}")


class MalformedResponse(RetrieverError):
    """Raised when response bytes are not valid JSON/XML."""

    def __init__(self, format: str, reason: str):
        self.format = format
        self.reason = reason
        super().__init__(f"Malformed {format} response: {reason}")


class ExtractionError(RetrieverError):
    """Raised when a parsed response cannot be normalized into a Paper."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class MissingField(ExtractionError):
    def __init__(self, field: str):
        super().__init__(field, f"Required field '{field}' not found in response")


class TransformFailed(ExtractionError):
    def __init__(self, field: str, cause: Exception):
        self.cause = cause
        super().__init__(field, f"Could not transform field '{field}': {cause}")


class TransformError(RetrieverError):
    """Raised by a single transform; carries no field context."""


class UnparseableDate(TransformError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unrecognized date: {value!r}")


class DocumentError(RetrieverError):
    """Raised when a paper's PDF cannot be retrieved."""
