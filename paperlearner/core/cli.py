"""
CLI interface for paperlearner
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .documents import download_pdf
from .errors import RetrieverError
from .library import Library
from .models import Paper
from .registry import load_registry
from .retriever import Retriever
from .settings import Settings, get_settings


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser"""
    parser = argparse.ArgumentParser(
        description="Fetch paper metadata into a local, searchable library."
    )
    parser.add_argument(
        "--config-dir",
        help="Directory with user source configurations.",
    )
    parser.add_argument(
        "--db",
        help="Library database path.",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        help="Abort when a user source configuration is invalid.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Fetch a paper and store it.")
    add.add_argument("input", help="Paper URL or identifier (arXiv id, DOI, IACR id).")
    add.add_argument("--pdf", action="store_true", help="Also download the PDF.")
    add.add_argument("--pdf-dir", help="Directory for downloaded PDFs.")

    search = commands.add_parser("search", help="Search the library.")
    search.add_argument("query", help="Full-text query.")
    search.add_argument("--limit", type=int, default=20, help="Maximum results.")

    commands.add_parser("sources", help="List configured sources in match order.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    _configure_logging(settings, verbose=args.verbose)

    try:
        if args.command == "sources":
            _list_sources(args, settings)
        elif args.command == "search":
            _search(args, settings)
        else:
            _add(args, settings)
    except (RetrieverError, ValueError) as exc:
        if args.verbose:
            raise
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.value)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(args, settings: Settings):
    config_dir = Path(args.config_dir) if args.config_dir else settings.config_dir
    return load_registry(
        user_dir=config_dir.expanduser(),
        strict=args.strict_config or settings.strict_config,
    )


def _library(args, settings: Settings) -> Library:
    return Library(Path(args.db) if args.db else settings.database_path)


def _list_sources(args, settings: Settings) -> None:
    registry = _load(args, settings)
    for source in registry:
        print(f"{source.name}\t{source.base_url}")
    for error in registry.skipped:
        print(f"skipped: {error}", file=sys.stderr)


def _search(args, settings: Settings) -> None:
    library = _library(args, settings)
    try:
        papers = library.search(args.query, limit=args.limit)
    finally:
        library.close()
    if not papers:
        print("No papers found.")
    for paper in papers:
        _print_paper(paper)


def _add(args, settings: Settings) -> None:
    registry = _load(args, settings)
    library = _library(args, settings)
    try:
        with Retriever(registry) as retriever:
            paper = retriever.fetch_sync(args.input)
            library.save(paper)
            _print_paper(paper)

            if args.pdf:
                pdf_dir = Path(args.pdf_dir) if args.pdf_dir else settings.pdf_dir
                path = download_pdf(
                    paper,
                    pdf_dir,
                    http=retriever.http,
                    timeout=settings.request_timeout,
                )
                library.record_pdf(paper, path)
                print(f"PDF: {path}")
    finally:
        library.close()


def _print_paper(paper: Paper) -> None:
    published = paper.publication_date.isoformat() if paper.publication_date else "?"
    print(f"[{paper.source}:{paper.identifier}] {paper.title}")
    print(f"    {', '.join(paper.authors)} ({published})")


if __name__ == "__main__":
    main()
