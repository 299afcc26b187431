"""
Retrieval of a paper's PDF document
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Union

from .errors import DocumentError, FetchError
from .http import HttpClient
from .models import Paper

logger = logging.getLogger(__name__)

MAX_FILENAME_STEM = 50


def pdf_filename(paper: Paper) -> str:
    """Filesystem-safe file name derived from the paper title"""
    stem = re.sub(r"[^a-z0-9]+", "_", paper.title.lower()).strip("_")
    stem = stem[:MAX_FILENAME_STEM].rstrip("_")
    if not stem:
        stem = re.sub(r"[^a-zA-Z0-9._-]+", "_", f"{paper.source}_{paper.identifier}").strip("_")
    return f"{stem}.pdf"


def download_pdf(
    paper: Paper,
    directory: Union[str, Path],
    http: Optional[HttpClient] = None,
    timeout: float = 30.0,
) -> Path:
    """
    Download the paper's PDF into ``directory``

    An existing non-empty file with the same name is reused.

    Raises:
        DocumentError: If the paper has no PDF URL or the download fails
    """
    if not paper.pdf_url:
        raise DocumentError(f"No PDF URL available for {paper.source}:{paper.identifier}")

    output_dir = Path(directory).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / pdf_filename(paper)
    if output_path.exists() and output_path.stat().st_size > 0:
        return output_path

    client = http or HttpClient()
    try:
        response = client.get(paper.pdf_url, timeout=timeout)
    except FetchError as exc:
        raise DocumentError(f"Failed to download PDF: {exc}") from exc
    finally:
        if http is None:
            client.close()

    try:
        output_path.write_bytes(response.content)
    except OSError as exc:
        raise DocumentError(f"Cannot write PDF to {output_path}: {exc}") from exc

    logger.debug("Wrote PDF for %s:%s to %s", paper.source, paper.identifier, output_path)
    return output_path
