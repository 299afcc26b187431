"""
Data models for paperlearner
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FieldPolicy:
    """Cardinality and presence rules for one canonical Paper field"""
    required: bool = False
    multiple: bool = False


CANONICAL_FIELDS: Dict[str, FieldPolicy] = {
    "title": FieldPolicy(required=True),
    "authors": FieldPolicy(required=True, multiple=True),
    "publication_date": FieldPolicy(required=True),
    "abstract": FieldPolicy(),
    "pdf_url": FieldPolicy(),
    "doi": FieldPolicy(),
}


@dataclass
class Paper:
    """Canonical metadata record of an academic paper"""
    source: str
    identifier: str
    title: str
    authors: List[str] = field(default_factory=list)
    abstract: str = ""
    publication_date: Optional[date] = None
    pdf_url: Optional[str] = None
    doi: Optional[str] = None

    @property
    def searchable_text(self) -> str:
        """Text projection indexed by the library's full-text search"""
        parts = [self.title, " ".join(self.authors), self.abstract]
        return " ".join(part for part in parts if part)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "identifier": self.identifier,
            "title": self.title,
            "authors": list(self.authors),
            "abstract": self.abstract,
            "publication_date": self.publication_date.isoformat()
            if self.publication_date
            else None,
            "pdf_url": self.pdf_url,
            "doi": self.doi,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Paper":
        published = data.get("publication_date")
        return cls(
            source=data["source"],
            identifier=data["identifier"],
            title=data["title"],
            authors=list(data.get("authors") or []),
            abstract=data.get("abstract") or "",
            publication_date=date.fromisoformat(published) if published else None,
            pdf_url=data.get("pdf_url"),
            doi=data.get("doi"),
        )

    def __str__(self):
        return f"{self.title} by {', '.join(self.authors) if self.authors else 'Unknown'}"
