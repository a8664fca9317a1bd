from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Document:
    """
    A plain-text document supplied by the caller.

    The search engine only ever reads documents; ingestion (file reading,
    PDF extraction, OCR) happens before a Document is built.
    """

    id: str
    name: str
    content: str
    size: int = 0
    type: str = "text/plain"
    upload_date: float = 0.0


@dataclass(frozen=True)
class Tag:
    """
    A user-defined label attachable to documents.
    """

    id: str
    name: str
    color: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(id=data["id"], name=data["name"], color=data.get("color", ""))


@dataclass(frozen=True)
class SearchResult:
    """
    Represents a single document hit with its ranking information.
    """

    doc_id: str
    doc_name: str
    match_count: int
    snippets: Tuple[str, ...] = field(default_factory=tuple)
    relevance_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly mapping using the camelCase keys of the results API."""
        return {
            "docId": self.doc_id,
            "docName": self.doc_name,
            "matchCount": self.match_count,
            "snippets": list(self.snippets),
            "relevanceScore": self.relevance_score,
        }
