"""Turning matches into (segment, highlighted) runs for renderers."""
from __future__ import annotations
import re
from typing import Iterable, List, Optional, Sequence, Tuple

Span = Tuple[str, bool]


def search_patterns(text: str, patterns: Optional[Sequence[str]]) -> List[Tuple[int, int]]:
    """
    Case-insensitive (start, end) spans of any pattern in text, leftmost first,
    non-overlapping. At one position the pattern listed first wins.
    """
    pats = [p for p in (patterns or ()) if p]
    if not pats:
        return []
    rx = re.compile("|".join(re.escape(p) for p in pats), re.IGNORECASE)
    return [m.span() for m in rx.finditer(text)]


def pattern_spans(text: str, patterns: Optional[Sequence[str]]) -> List[Span]:
    spans: List[Span] = []
    last = 0
    for start, end in search_patterns(text, patterns):
        if start > last:
            spans.append((text[last:start], False))
        spans.append((text[start:end], True))
        last = end
    if last < len(text) or not spans:
        spans.append((text[last:], False))
    return spans


def index_spans(text: str, indices: Iterable[int]) -> List[Span]:
    """Group character positions (from RankingEngine.highlight_indices) into runs."""
    marked = set(indices)
    if not marked:
        return [(text, False)]
    spans: List[Span] = []
    chunk: list[str] = []
    state = False
    for i, ch in enumerate(text):
        hit = i in marked
        if hit != state and chunk:
            spans.append(("".join(chunk), state))
            chunk = []
        chunk.append(ch)
        state = hit
    if chunk:
        spans.append(("".join(chunk), state))
    return spans


def contains_any(text: str, patterns: Optional[Sequence[str]]) -> bool:
    return bool(search_patterns(text, patterns))
