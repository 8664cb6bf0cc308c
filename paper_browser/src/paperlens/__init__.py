"""
paperlens: incremental fuzzy search and selection for a paper browser.

A corpus of documents is loaded once; the user types a query one character
at a time and every keystroke re-ranks the corpus synchronously. The cursor
over the visible list is kept valid while that list changes size and order.

Main pieces:
    RankingEngine           tiered scoring over cached haystacks
    QuerySession            query buffer + haystack cache + ranked indices
    SelectionSynchronizer   visible index <-> corpus index, paging
    Browser                 facade used by the CLI, Flask and desktop frontends

Example:
    from paperlens import Action, Browser, synthetic_corpus

    b = Browser()
    b.load(synthetic_corpus(50))
    b.perform(Action.SEARCH)
    for c in "robotics":
        b.type_char(c)
    print([h.document.title for h in b.hits()])
"""

from .actions import Action, Context, SearchAction
from .config import BrowserConfig, ScoringConfig, load_config
from .engine import Browser
from .loader import FeedParseError, load_corpus, parse_feed, synthetic_corpus
from .models import Corpus, Document, SearchHit
from .search import RankingEngine
from .selection import SelectionSynchronizer, half_page_step
from .session import QuerySession

__version__ = "0.1.0"
__all__ = [
    "Action", "Browser", "BrowserConfig", "Context", "Corpus", "Document",
    "FeedParseError", "QuerySession", "RankingEngine", "ScoringConfig", "SearchAction",
    "SearchHit", "SelectionSynchronizer", "half_page_step", "load_config", "load_corpus",
    "parse_feed", "synthetic_corpus",
]
