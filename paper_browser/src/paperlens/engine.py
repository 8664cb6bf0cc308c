# paperlens/engine.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .actions import Action, Context, SearchAction, SearchOp
from .config import BrowserConfig, TOP_K
from .loader import load_corpus
from .models import Corpus, Document, SearchHit
from .search import RankingEngine
from .selection import SelectionSynchronizer, half_page_step
from .session import QuerySession

log = logging.getLogger(__name__)

NOTHING_SELECTED = "Nothing selected"


class Browser:
    """
    Thin orchestration layer that glues together:
      - the corpus (owned here, replaced wholesale on load),
      - a QuerySession (query buffer, haystack cache, ranked indices),
      - a SelectionSynchronizer (cursor over the visible list),
      - the UI context (article list / search / popups).

    Public API (used by the CLI, Flask and the desktop app):
      * build(paths):       read feeds from disk -> load()
      * load(corpus):       install a corpus, reset query and cursor
      * perform(action, h): run one Action with viewport height h
      * type_char / backspace / clear_search: input-layer shortcuts
      * hits(limit):        visible rows with highlight positions
      * shutdown():         drop state
    Everything runs synchronously on the caller's thread.
    """

    # ------------- lifecycle -------------

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        self.config = config or BrowserConfig()
        self.corpus: Optional[Corpus] = None
        self.session = QuerySession(RankingEngine(self.config.scoring))
        self.selection = SelectionSynchronizer(self.session, self._corpus_len)
        self.context = Context.ARTICLE_LIST
        self.running = True

    # /* ~~~ Read feeds from disk and install them ~~~ */
    def build(self, paths: Iterable[str], *, only_new: bool = True, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
        paths = list(paths)
        if not paths:
            raise ValueError("build(): at least one corpus path is required")
        log.info("Loading corpus from %s", paths)
        self.load(load_corpus(paths, only_new=only_new))

    def load(self, corpus: Corpus) -> None:
        self.corpus = corpus
        self.session.set_corpus(corpus.documents)
        self.selection.on_corpus_loaded()
        self.context = Context.ARTICLE_LIST
        log.info("Browser load() complete: articles=%d", len(corpus.documents))

    def shutdown(self) -> None:
        self.running = False
        self.corpus = None
        self.session.set_corpus([])
        self.selection.clamp()
        self.context = Context.ARTICLE_LIST
        log.info("Browser shutdown complete")

    # ------------- reads -------------

    @property
    def documents(self) -> List[Document]:
        self._require_corpus()
        return self.corpus.documents  # type: ignore[union-attr]

    def visible_count(self) -> int:
        return self.selection.visible_count()

    def visible_indices(self) -> List[int]:
        if self.session.is_active():
            return self.session.filtered_indices()
        return list(range(self._corpus_len()))

    def visible_documents(self) -> List[Document]:
        docs = self.documents
        return [docs[i] for i in self.visible_indices()]

    def selected_index(self) -> Optional[int]:
        return self.selection.selected

    def selected_document(self) -> Optional[Document]:
        idx = self.selection.selected_corpus_index()
        if idx is None:
            return None
        return self.documents[idx]

    def hits(self, limit: Optional[int] = TOP_K) -> List[SearchHit]:
        """Visible rows in display order, each with title highlight positions."""
        docs = self.documents
        rows = []
        for idx in self.visible_indices()[:limit]:
            doc = docs[idx]
            rows.append(SearchHit(idx, doc, self.session.highlight_indices(doc.title)))
        return rows

    def yank_id(self) -> str:
        doc = self.selected_document() if self.corpus is not None else None
        return doc.id if doc is not None else NOTHING_SELECTED

    # ------------- input layer -------------

    def type_char(self, c: str) -> None:
        self._search_input(SearchAction.push(c))

    def backspace(self) -> None:
        self._search_input(SearchAction.pop())

    def clear_search(self) -> None:
        self._search_input(SearchAction.clear())

    def search(self, query: str) -> List[int]:
        """Replace the whole query (one-shot callers) and return the ranked indices."""
        self._require_corpus()
        self.session.set_query(query)
        self.session.verify_indices_integrity(self._corpus_len())
        self.selection.on_query_changed()
        return self.session.filtered_indices()

    # ------------- context -------------

    def set_context(self, new: Context) -> None:
        if self.context is Context.SEARCH and new is Context.ARTICLE_LIST:
            self.selection.leave_search()
        if new is Context.SEARCH and self.corpus is not None:
            self.selection.enter_search(self.corpus.documents)
        log.debug("context %s -> %s", self.context.value, new.value)
        self.context = new

    def toggle_focus(self) -> None:
        if self.context is Context.ARTICLE_LIST:
            self.set_context(Context.SEARCH)
        elif self.context is Context.SEARCH:
            self.set_context(Context.ARTICLE_LIST)

    def toggle_config(self) -> None:
        self._toggle_popup(Context.CONFIG)

    def toggle_help(self) -> None:
        self._toggle_popup(Context.HELP)

    # /* ~~~ Dispatch one action; returns the yanked id for YANK_ID ~~~ */
    def perform(self, action: Action | SearchAction, viewport_height: int = 0) -> Optional[str]:
        if isinstance(action, SearchAction):
            self._search_input(action)
            return None

        sel = self.selection
        if action is Action.QUIT:
            self.running = False
        elif action is Action.MOVE_UP:
            sel.move_up()
        elif action is Action.MOVE_DOWN:
            sel.move_down()
        elif action is Action.PAGE_UP:
            sel.scroll_up(half_page_step(viewport_height))
        elif action is Action.PAGE_DOWN:
            sel.scroll_down(half_page_step(viewport_height))
        elif action is Action.GO_TO_TOP:
            sel.select_first()
        elif action is Action.GO_TO_BOTTOM:
            sel.select_last()
        elif action is Action.TOGGLE_CONFIG:
            self.toggle_config()
        elif action is Action.SHOW_HELP:
            self.toggle_help()
        elif action is Action.YANK_ID:
            return self.yank_id()
        elif action is Action.SEARCH:
            self.set_context(Context.SEARCH)
        elif action is Action.TOGGLE_FOCUS:
            self.toggle_focus()
        elif action is Action.CLOSE_POPUP:
            if self.context is Context.ARTICLE_LIST:
                self.running = False
            else:
                self.set_context(Context.ARTICLE_LIST)
        return None

    # ------------- internals -------------

    def _search_input(self, act: SearchAction) -> None:
        self._require_corpus()
        if act.op is SearchOp.PUSH_CHAR:
            self.session.push_char(act.char or "")
        elif act.op is SearchOp.POP_CHAR:
            self.session.pop_char()
        else:
            self.session.clear()
        self.session.verify_indices_integrity(self._corpus_len())
        self.selection.on_query_changed()

    def _toggle_popup(self, ctx: Context) -> None:
        self.set_context(Context.ARTICLE_LIST if self.context is ctx else ctx)

    def _corpus_len(self) -> int:
        return len(self.corpus.documents) if self.corpus is not None else 0

    def _require_corpus(self) -> None:
        if self.corpus is None:
            raise RuntimeError("Browser not initialized. Call build() or load() first.")
