"""Local paper library: SQLite storage with a full-text index.

Papers are upserted by their (source, identifier) pair. The ``papers_fts``
FTS5 table indexes title and a searchable-text projection and is kept in
sync with ``papers`` by triggers, so every write through this module is
immediately searchable.
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, create_engine, select
from sqlalchemy import text as sql_text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from .models import Paper

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class PaperRecord(Base):
    __tablename__ = "papers"
    __table_args__ = (UniqueConstraint("source", "identifier", name="uq_papers_source_identifier"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source: Mapped[str] = mapped_column(String(100))
    identifier: Mapped[str] = mapped_column(String(255))
    title: Mapped[str] = mapped_column(Text)
    authors: Mapped[str] = mapped_column(Text)  # JSON list of names
    abstract: Mapped[str] = mapped_column(Text, default="")
    publication_date: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    pdf_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    doi: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    searchable_text: Mapped[str] = mapped_column(Text, default="")
    pdf_path: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    def fill(self, paper: Paper) -> None:
        self.title = paper.title
        self.authors = json.dumps(paper.authors, ensure_ascii=False)
        self.abstract = paper.abstract
        self.publication_date = (
            paper.publication_date.isoformat() if paper.publication_date else None
        )
        self.pdf_url = paper.pdf_url
        self.doi = paper.doi
        self.searchable_text = paper.searchable_text

    def to_paper(self) -> Paper:
        return Paper(
            source=self.source,
            identifier=self.identifier,
            title=self.title,
            authors=json.loads(self.authors or "[]"),
            abstract=self.abstract or "",
            publication_date=date.fromisoformat(self.publication_date)
            if self.publication_date
            else None,
            pdf_url=self.pdf_url,
            doi=self.doi,
        )


FTS_SCHEMA = [
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS papers_fts USING fts5(
        title,
        searchable_text,
        content=papers,
        content_rowid=id,
        tokenize='unicode61 remove_diacritics 1'
    )
    """,
    """
    CREATE TRIGGER IF NOT EXISTS papers_ai AFTER INSERT ON papers BEGIN
        INSERT INTO papers_fts(rowid, title, searchable_text)
        VALUES (new.id, new.title, new.searchable_text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS papers_ad AFTER DELETE ON papers BEGIN
        INSERT INTO papers_fts(papers_fts, rowid, title, searchable_text)
        VALUES ('delete', old.id, old.title, old.searchable_text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS papers_au AFTER UPDATE ON papers BEGIN
        INSERT INTO papers_fts(papers_fts, rowid, title, searchable_text)
        VALUES ('delete', old.id, old.title, old.searchable_text);
        INSERT INTO papers_fts(rowid, title, searchable_text)
        VALUES (new.id, new.title, new.searchable_text);
    END
    """,
]


class Library:
    """Persistent, searchable store of Paper records"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(f"sqlite:///{self.path}", future=True)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self._init_schema()

    def _init_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        with self.engine.begin() as conn:
            for statement in FTS_SCHEMA:
                conn.execute(sql_text(statement))

    def save(self, paper: Paper) -> int:
        """Insert or update ``paper``; returns its persistent id"""
        with self.Session.begin() as session:
            record = session.scalar(self._by_key(paper.source, paper.identifier))
            if record is None:
                record = PaperRecord(source=paper.source, identifier=paper.identifier)
                session.add(record)
            record.fill(paper)
            session.flush()
            logger.debug("Saved %s:%s as #%d", paper.source, paper.identifier, record.id)
            return record.id

    def get(self, source: str, identifier: str) -> Optional[Paper]:
        with self.Session() as session:
            record = session.scalar(self._by_key(source, identifier))
            return record.to_paper() if record else None

    def search(self, query: str, limit: int = 50) -> List[Paper]:
        """Full-text search (FTS5 query syntax), best matches first"""
        statement = sql_text(
            "SELECT papers.id FROM papers "
            "JOIN papers_fts ON papers.id = papers_fts.rowid "
            "WHERE papers_fts MATCH :query ORDER BY rank LIMIT :limit"
        )
        with self.Session() as session:
            try:
                ids = [row[0] for row in session.execute(statement, {"query": query, "limit": limit})]
            except OperationalError as exc:
                raise ValueError(f"Invalid search query {query!r}: {exc.orig}") from exc
            if not ids:
                return []
            records = {
                record.id: record
                for record in session.scalars(select(PaperRecord).where(PaperRecord.id.in_(ids)))
            }
            return [records[paper_id].to_paper() for paper_id in ids if paper_id in records]

    def all(self) -> List[Paper]:
        with self.Session() as session:
            records = session.scalars(
                select(PaperRecord).order_by(
                    PaperRecord.publication_date.desc(), PaperRecord.id.desc()
                )
            )
            return [record.to_paper() for record in records]

    def remove(self, source: str, identifier: str) -> bool:
        with self.Session.begin() as session:
            record = session.scalar(self._by_key(source, identifier))
            if record is None:
                return False
            session.delete(record)
            return True

    def record_pdf(self, paper: Paper, path: Union[str, Path]) -> None:
        with self.Session.begin() as session:
            record = session.scalar(self._by_key(paper.source, paper.identifier))
            if record is None:
                raise KeyError(f"{paper.source}:{paper.identifier} is not in the library")
            record.pdf_path = str(path)

    def pdf_path(self, source: str, identifier: str) -> Optional[Path]:
        with self.Session() as session:
            record = session.scalar(self._by_key(source, identifier))
            if record is None or not record.pdf_path:
                return None
            return Path(record.pdf_path)

    def close(self) -> None:
        self.engine.dispose()

    @staticmethod
    def _by_key(source: str, identifier: str):
        return select(PaperRecord).where(
            PaperRecord.source == source, PaperRecord.identifier == identifier
        )
