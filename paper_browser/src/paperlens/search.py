from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .config import ScoringConfig, LENGTH_BONUS_CAP
from .normalize import fold, byte_len, byte_windows, query_atoms, query_words, fold_aligned
from . import matcher

log = logging.getLogger(__name__)

# Ranking: a loose subsequence matcher proposes candidates, then a strict tiered
# scorer decides. Only the scorer's numbers count.
#
#   tier 1  exact substring (+ prefix, + word boundary, + exact word)
#   tier 2  every filtered query word is a substring
#   tier 3  every filtered word is a substring or shares a byte window (one typo)
#   bonus   shorter haystacks first, only after acceptance


def _exact_substring_score(q: str, content: str, cfg: ScoringConfig) -> int:
    score = cfg.match_boost_exact_substring
    if content.startswith(q):
        score += cfg.match_boost_prefix
    words = content.split()
    if any(w.startswith(q) for w in words):
        score += cfg.match_boost_word_boundary
    if any(w == q for w in words):
        score += cfg.match_boost_exact_word
    return score


def _window_hit(word: str, content: str, size: int) -> bool:
    if word in content:
        return True
    return any(w in content for w in byte_windows(word, size))


def score_folded(q: str, words: Sequence[str], content: str, cfg: ScoringConfig) -> int:
    """
    /* ~~~ Score one case-folded haystack against a case-folded query.
       Returns 0 when the candidate does not clear cfg.strictness_threshold. ~~~ */
    """
    score = 0
    if q in content:
        score = _exact_substring_score(q, content, cfg)
    elif words:
        if all(w in content for w in words):
            score = cfg.match_boost_all_words_present
        elif byte_len(q) >= cfg.fuzzy_window_size:
            if all(_window_hit(w, content, cfg.fuzzy_window_size) for w in words):
                # barely clears the bar: typo tolerance, not a strong match
                score = cfg.strictness_threshold

    if score < cfg.strictness_threshold:
        return 0
    return score + (LENGTH_BONUS_CAP - min(byte_len(content), LENGTH_BONUS_CAP))


class RankingEngine:
    """
    Filters and orders haystacks for a query.

    filter() returns corpus indices (positions in `haystacks`) sorted by
    descending score, ascending index on ties. An empty query returns every
    index in original order without scoring.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def filter(self, query: str, haystacks: Sequence[str]) -> List[int]:
        if not query:
            return list(range(len(haystacks)))

        q = fold(query)
        words = query_words(query, self.config.min_word_length_for_filter)
        folded = [fold(h) for h in haystacks]

        scored: list[tuple[int, int]] = []
        for idx in matcher.candidates(q.split(), folded):
            sc = score_folded(q, words, folded[idx], self.config)
            if sc:
                scored.append((idx, sc))

        scored.sort(key=lambda r: (-r[1], r[0]))
        out = [idx for idx, _ in scored]
        for idx in out:
            assert 0 <= idx < len(haystacks), f"ranked index {idx} outside haystacks ({len(haystacks)})"
        log.debug("filter(%r): %d/%d accepted", query, len(out), len(haystacks))
        return out

    def score(self, query: str, haystack: str) -> int:
        """
        Final score of one haystack, 0 if it would be rejected (including when
        the candidate matcher does not propose it). Empty query scores 0.
        """
        if not query:
            return 0
        q = fold(query)
        content = fold(haystack)
        if not matcher.candidates(q.split(), [content]):
            return 0
        words = query_words(query, self.config.min_word_length_for_filter)
        return score_folded(q, words, content, self.config)

    def highlight_indices(self, query: str, text: str) -> List[int]:
        """
        Character positions of `text` to emphasize for `query`.

        Computed by the approximate matcher on every call, independently of
        filter(). It can return [] for a text that filter() accepted (for
        example a typo-tolerant match whose letters are not all present), so
        callers must not treat an empty result as "not a match".
        """
        if not query:
            return []
        return matcher.match_positions(query_atoms(query), fold_aligned(text))
