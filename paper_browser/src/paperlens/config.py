from __future__ import annotations
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

TOP_K: int = 20

# /* ~~~ ranking weights (higher tier subsumes lower for the same candidate) ~~~ */
STRICTNESS_THRESHOLD: int = 200
MATCH_BOOST_EXACT_SUBSTRING: int = 1000
MATCH_BOOST_PREFIX: int = 500
MATCH_BOOST_WORD_BOUNDARY: int = 300
MATCH_BOOST_EXACT_WORD: int = 200
MATCH_BOOST_ALL_WORDS_PRESENT: int = 250
MATCH_BOOST_FUZZY_WINDOW: int = 50

# Words shorter than this (in UTF-8 bytes) are ignored by the multi-word tiers
MIN_WORD_LENGTH_FOR_FILTER: int = 3

# Byte window used by the typo-tolerant fallback
FUZZY_WINDOW_SIZE: int = 4

# PageUp/PageDown move half a viewport, but never less than this
HALF_PAGE_MIN_STEP: int = 1

# Shorter haystacks get up to this many bonus points once accepted
LENGTH_BONUS_CAP: int = 100

# arXiv category shown in headers (the corpus itself is read from local files)
DEFAULT_CATEGORY: str = "quant-ph"

# /* ~~~ config file lookup ~~~ */
CONFIG_ENV_VAR = "PAPERLENS_CONFIG"
CONFIG_FILE = Path.home() / ".config" / "paperlens" / "config.toml"


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and thresholds for the tiered ranking in search.RankingEngine."""
    strictness_threshold: int = STRICTNESS_THRESHOLD
    match_boost_exact_substring: int = MATCH_BOOST_EXACT_SUBSTRING
    match_boost_prefix: int = MATCH_BOOST_PREFIX
    match_boost_word_boundary: int = MATCH_BOOST_WORD_BOUNDARY
    match_boost_exact_word: int = MATCH_BOOST_EXACT_WORD
    match_boost_all_words_present: int = MATCH_BOOST_ALL_WORDS_PRESENT
    # Kept for configuration compatibility; the fuzzy tier scores exactly
    # strictness_threshold so that it only just clears the bar.
    match_boost_fuzzy_window: int = MATCH_BOOST_FUZZY_WINDOW
    min_word_length_for_filter: int = MIN_WORD_LENGTH_FOR_FILTER
    fuzzy_window_size: int = FUZZY_WINDOW_SIZE

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"ScoringConfig.{f.name} must be a non-negative int, got {value!r}")
        if self.fuzzy_window_size == 0:
            raise ValueError("ScoringConfig.fuzzy_window_size must be >= 1")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScoringConfig":
        """Build from a dict (e.g. a TOML [search] table); unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class BrowserConfig:
    category: str = DEFAULT_CATEGORY
    highlight_keywords: Optional[list[str]] = None
    highlight_authors: Optional[list[str]] = None
    scoring: ScoringConfig = field(default_factory=ScoringConfig)


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV_VAR)
    return Path(env) if env else CONFIG_FILE


def parse_config(text: str) -> BrowserConfig:
    """
    Parse TOML of the form:

        [query]
        category = "quant-ph"
        [highlight]
        keywords = ["TUI"]
        authors = ["Alice"]
        [search]
        strictness_threshold = 200

    Every table and key is optional.
    """
    data = tomllib.loads(text)
    query = data.get("query", {})
    highlight = data.get("highlight", {})
    search = data.get("search", {})
    return BrowserConfig(
        category=str(query.get("category", DEFAULT_CATEGORY)),
        highlight_keywords=_str_list(highlight.get("keywords")),
        highlight_authors=_str_list(highlight.get("authors")),
        scoring=ScoringConfig.from_mapping(search),
    )


def load_config(path: str | os.PathLike | None = None) -> BrowserConfig:
    """Read the config file; a missing file means defaults."""
    p = Path(path) if path is not None else default_config_path()
    if not p.exists():
        return BrowserConfig()
    return parse_config(p.read_text(encoding="utf-8"))


def _str_list(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]
