from __future__ import annotations
from typing import List


def fold(text: str) -> str:
    """Case-fold for matching (full lowercase; may change the length)."""
    return text.lower()


def fold_aligned(text: str) -> str:
    """
    Lowercase char by char, keeping len(result) == len(text) so that an index
    into the result is also an index into the original. Characters whose
    lowercase form expands (e.g. 'İ') are kept as-is.
    """
    out: list[str] = []
    for ch in text:
        low = ch.lower()
        out.append(low if len(low) == 1 else ch)
    return "".join(out)


def byte_len(s: str) -> int:
    return len(s.encode("utf-8"))


def query_atoms(query: str) -> List[str]:
    """Whitespace-separated pieces of the folded query, as the matcher sees them."""
    return fold_aligned(query).split()


def query_words(query: str, min_len: int) -> List[str]:
    """
    Words used by the multi-word tiers: lowercase, hyphens treated as spaces,
    and anything shorter than min_len UTF-8 bytes dropped.
    """
    words = fold(query).replace("-", " ").split()
    return [w for w in words if byte_len(w) >= min_len]


def byte_windows(word: str, size: int) -> List[str]:
    """
    Contiguous size-byte windows of word's UTF-8 encoding, in order, without
    duplicates. Windows that cut through a multi-byte character are not valid
    text and are skipped.
    """
    raw = word.encode("utf-8")
    if size <= 0 or len(raw) < size:
        return []
    seen: set[str] = set()
    out: List[str] = []
    for i in range(len(raw) - size + 1):
        try:
            w = raw[i:i + size].decode("utf-8")
        except UnicodeDecodeError:
            continue
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out
