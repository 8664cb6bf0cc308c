"""
Approximate-match primitive used behind RankingEngine.

A text "matches" an atom when the atom is a subsequence of it (every
character present, in order, gaps allowed). This is deliberately loose:
its only jobs are to produce a candidate set for the tiered scorer in
search.py and to produce highlight positions. Its scores are never used
for ranking or acceptance.

Backed by rapidfuzz's LCS distance: an atom is a subsequence of a text
exactly when their longest common subsequence is as long as the atom.
All inputs are expected to be case-folded already.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from rapidfuzz import process
from rapidfuzz.distance import LCSseq


def is_subsequence(atom: str, text: str) -> bool:
    if not atom:
        return True
    if atom in text:
        return True
    return LCSseq.similarity(atom, text, score_cutoff=len(atom)) >= len(atom)


def candidates(atoms: Sequence[str], texts: Sequence[str]) -> List[int]:
    """Indices of texts that contain every atom as a subsequence, ascending."""
    if not atoms:
        return list(range(len(texts)))

    keep: Optional[set[int]] = None
    for atom in atoms:
        hits = {
            idx
            for _, _, idx in process.extract_iter(
                atom, texts, scorer=LCSseq.similarity, processor=None, score_cutoff=len(atom)
            )
        }
        keep = hits if keep is None else keep & hits
        if not keep:
            return []
    return sorted(keep or ())


def align(atom: str, text: str) -> Optional[List[int]]:
    """
    Positions in text that the atom lines up with, or None if the atom is
    not a subsequence of text. A literal occurrence wins (leftmost, contiguous);
    otherwise the LCS alignment is used.
    """
    if not atom:
        return []
    start = text.find(atom)
    if start != -1:
        return list(range(start, start + len(atom)))
    if not is_subsequence(atom, text):
        return None
    positions: List[int] = []
    for block in LCSseq.editops(atom, text).as_matching_blocks():
        positions.extend(range(block.b, block.b + block.size))
    return positions


def match_positions(atoms: Sequence[str], text: str) -> List[int]:
    """
    Union of the alignments of every atom; [] as soon as one atom has no
    alignment (all atoms must match, as in candidates()).
    """
    out: set[int] = set()
    for atom in atoms:
        pos = align(atom, text)
        if pos is None:
            return []
        out.update(pos)
    return sorted(out)
