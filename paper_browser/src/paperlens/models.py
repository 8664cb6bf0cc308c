# src/paperlens/models.py
"""
Data models for the paper browser.

- Document: one corpus entry (an arXiv article), immutable.
- Corpus: the ordered documents of one load plus the feed timestamp.
- SearchHit: one row handed to a renderer.

These classes carry no ranking logic. Everything else in the package refers
to documents by their position in Corpus.documents (the "corpus index"),
never by reference.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True, slots=True)
class Document:
    """
    An immutable corpus entry.

    Attributes
    ----------
    title : str
        Display title (arXiv line-wrapping already removed).
    body : str
        Searchable body text; the article abstract.
    id : str
        Opaque identifier (the arXiv abs URL). Not used for identity inside
        the core: identity is the position in the corpus.
    authors : Tuple[str, ...]
        Author names in feed order.
    updated, published : str
        Timestamps exactly as they appear in the feed.
    metadata : Dict[str, Any]
        Free-form extras supplied by the corpus provider.
    """
    title: str
    body: str
    id: str
    authors: Tuple[str, ...] = ()
    updated: str = ""
    published: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def all_authors(self) -> str:
        return ", ".join(self.authors)

    def haystack(self) -> str:
        """Searchable text for this document."""
        return f"{self.title} {self.body}"


@dataclass(slots=True)
class Corpus:
    """The documents of one load. Replaced wholesale on refresh, never patched."""
    documents: List[Document]
    updated: str = ""

    def __len__(self) -> int:
        return len(self.documents)


@dataclass(frozen=True, slots=True)
class SearchHit:
    """
    A ranked row for presentation.

    Attributes
    ----------
    corpus_index : int
        Position of the document in the full corpus.
    document : Document
        The document itself.
    highlight : List[int]
        Character positions of the title to emphasize. May be empty even for
        a ranked document (see RankingEngine.highlight_indices).
    """
    corpus_index: int
    document: Document
    highlight: List[int]

    def to_dict(self) -> dict:
        d = self.document
        return {
            "corpus_index": self.corpus_index,
            "id": d.id,
            "title": d.title,
            "authors": list(d.authors),
            "summary": d.body,
            "updated": d.updated,
            "published": d.published,
            "highlight": list(self.highlight),
        }
