from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .models import Document
from .normalize import fold
from .search import RankingEngine

log = logging.getLogger(__name__)


class QuerySession:
    """
    Owns the query buffer, the haystack cache and the current ranked indices.

    Haystacks are built once per corpus (set_corpus / reindex) and reused by
    every keystroke. Each mutation re-ranks synchronously before returning.
    """

    def __init__(self, engine: Optional[RankingEngine] = None) -> None:
        self.engine = engine or RankingEngine()
        self._query: str = ""
        self._haystacks: List[str] = []
        self._ranked: List[int] = []

    def __repr__(self) -> str:
        return f"QuerySession(query={self._query!r}, results={len(self._ranked)})"

    # ------------- corpus -------------

    def set_corpus(self, documents: Sequence[Document]) -> None:
        """New corpus: rebuild haystacks, drop the query, identity order."""
        self._haystacks = [d.haystack() for d in documents]
        self._query = ""
        self._run()

    def reindex(self, documents: Sequence[Document]) -> None:
        """Rebuild haystacks but keep the current query."""
        self._haystacks = [d.haystack() for d in documents]
        self._run()

    # ------------- query mutation -------------

    @property
    def query(self) -> str:
        return self._query

    def push_char(self, c: str) -> None:
        if len(c) != 1:
            raise ValueError(f"push_char expects a single character, got {c!r}")
        self._query += c
        self._run()

    def pop_char(self) -> None:
        # str slicing works on code points, never on bytes
        self._query = self._query[:-1]
        self._run()

    def clear(self) -> None:
        self._query = ""
        self._run()

    def set_query(self, text: str) -> None:
        self._query = text
        self._run()

    # ------------- reads -------------

    def is_active(self) -> bool:
        return bool(self._query)

    def filtered_count(self) -> int:
        return len(self._ranked)

    def filtered_indices(self) -> List[int]:
        return list(self._ranked)

    def corpus_index_at(self, pos: int) -> Optional[int]:
        if 0 <= pos < len(self._ranked):
            return self._ranked[pos]
        return None

    def haystack_count(self) -> int:
        return len(self._haystacks)

    def highlight_indices(self, text: str) -> List[int]:
        return self.engine.highlight_indices(self._query, text)

    # ------------- diagnostics -------------

    def verify_indices_integrity(self, corpus_len: int) -> None:
        for idx in self._ranked:
            assert 0 <= idx < corpus_len, f"Index {idx} out of bounds (corpus has {corpus_len})"

    def rendered_titles(self, documents: Sequence[Document]) -> List[str]:
        return [documents[i].title for i in self._ranked]

    def match_relevance(self, documents: Sequence[Document]) -> List[tuple[int, bool]]:
        """(index, literally contains the query) for each ranked document."""
        q = fold(self._query)
        return [(i, q in fold(documents[i].haystack())) for i in self._ranked]

    # ------------- internals -------------

    def _run(self) -> None:
        self._ranked = self.engine.filter(self._query, self._haystacks)
        log.debug("query=%r -> %d/%d", self._query, len(self._ranked), len(self._haystacks))
