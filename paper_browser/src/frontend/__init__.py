"""Module-level API over a single Browser (for scripts and the web app)."""
from __future__ import annotations
import time
import logging
from typing import List, Optional

from paperlens.config import TOP_K, BrowserConfig, load_config
from paperlens.engine import Browser
from paperlens.loader import load_corpus, synthetic_corpus
from paperlens.models import SearchHit

log = logging.getLogger(__name__)

_browser: Browser | None = None


def initialize(paths: list[str] | None = None,
               synthetic: int | None = None,
               config_path: str | None = None,
               only_new: bool = True,
               verbose: bool = False) -> Browser:
    """
    Init modes:
      1) Feeds on disk: paths to Atom/JSON files or folders.
      2) Demo: `synthetic` noise articles, no files needed.
    """
    global _browser
    t0 = time.perf_counter()
    if verbose:
        logging.basicConfig(level=logging.INFO)

    cfg: BrowserConfig = load_config(config_path)
    browser = Browser(cfg)
    if paths:
        browser.load(load_corpus(paths, only_new=only_new))
    elif synthetic is not None:
        browser.load(synthetic_corpus(synthetic))
    else:
        raise ValueError("initialize(): give corpus paths or a synthetic size")

    _browser = browser
    log.info("init complete in %.2fs", time.perf_counter() - t0)
    return browser


def search(query: str, k: Optional[int] = TOP_K) -> List[SearchHit]:
    """Ranked rows for `query` (all documents for an empty query), top k."""
    if _browser is None:
        raise RuntimeError("Browser not initialized. Call initialize(...) first.")
    _browser.search(query)
    return _browser.hits(limit=k)
