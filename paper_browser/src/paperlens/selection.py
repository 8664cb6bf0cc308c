from __future__ import annotations
from typing import Callable, Optional, Sequence

from .config import HALF_PAGE_MIN_STEP
from .models import Document
from .session import QuerySession


def half_page_step(viewport_height: int) -> int:
    """Rows to move on PageUp/PageDown; at least 1 even for tiny viewports."""
    if viewport_height < 0:
        raise ValueError(f"viewport_height must be >= 0, got {viewport_height}")
    return max(HALF_PAGE_MIN_STEP, viewport_height // 2)


class SelectionSynchronizer:
    """
    Keeps the list cursor valid while the visible list changes under it.

    "Visible index" is a row in whatever is shown: the ranked results while a
    query is active, the full corpus otherwise. "Corpus index" is the position
    in the corpus. get_corpus_index() is the only translation between them.

    Invariant after every public call: `selected` is None iff the visible
    count is 0, otherwise 0 <= selected < visible count. The visible count is
    re-read on every call because it changes on every keystroke.
    """

    def __init__(self, session: QuerySession, corpus_len: Callable[[], int]) -> None:
        self.session = session
        self._corpus_len = corpus_len
        self._cursor: Optional[int] = None
        self.clamp()

    @property
    def selected(self) -> Optional[int]:
        return self._cursor

    def visible_count(self) -> int:
        if self.session.is_active():
            return self.session.filtered_count()
        return self._corpus_len()

    def get_corpus_index(self, visible_index: int) -> Optional[int]:
        if visible_index < 0:
            return None
        if self.session.is_active():
            return self.session.corpus_index_at(visible_index)
        return visible_index if visible_index < self._corpus_len() else None

    def selected_corpus_index(self) -> Optional[int]:
        if self._cursor is None:
            return None
        return self.get_corpus_index(self._cursor)

    def select(self, visible_index: Optional[int]) -> None:
        """Select a row; anything out of range is clamped."""
        self._cursor = visible_index
        self.clamp()

    # ------------- triggers -------------

    def on_query_changed(self) -> None:
        # ranked order can change arbitrarily between keystrokes: snap to the top
        self._cursor = 0 if self.visible_count() > 0 else None

    def on_corpus_loaded(self) -> None:
        self._cursor = 0 if self.visible_count() > 0 else None

    def enter_search(self, documents: Sequence[Document]) -> None:
        # an active query from an earlier visit is re-ranked, not thrown away
        if self.session.is_active():
            self.session.reindex(documents)
        else:
            self.session.set_corpus(documents)
        self.clamp()

    def leave_search(self) -> None:
        """
        Back to the full list, keeping the paper that was selected.

        A corpus index that no longer exists (the corpus shrank on refresh)
        means no selection to restore; clamp() then puts the cursor on row 0
        when the list is non-empty, since `selected` may only be None over an
        empty list.
        """
        corpus_index = self.selected_corpus_index()
        self.session.clear()
        if corpus_index is not None and corpus_index < self._corpus_len():
            self._cursor = corpus_index
        else:
            self._cursor = None
        self.clamp()

    # ------------- navigation -------------

    def select_first(self) -> None:
        if self.visible_count() > 0:
            self._cursor = 0
        else:
            self._cursor = None

    def select_last(self) -> None:
        n = self.visible_count()
        self._cursor = n - 1 if n > 0 else None

    def scroll_by(self, step: int) -> None:
        n = self.visible_count()
        if n == 0:
            self._cursor = None
            return
        current = self._cursor if self._cursor is not None else 0
        self._cursor = min(max(current + step, 0), n - 1)

    def scroll_down(self, step: int) -> None:
        self.scroll_by(abs(step))

    def scroll_up(self, step: int) -> None:
        self.scroll_by(-abs(step))

    def move_down(self) -> None:
        self.scroll_by(1)

    def move_up(self) -> None:
        self.scroll_by(-1)

    def page_down(self, viewport_height: int) -> None:
        self.scroll_down(half_page_step(viewport_height))

    def page_up(self, viewport_height: int) -> None:
        self.scroll_up(half_page_step(viewport_height))

    def clamp(self) -> None:
        n = self.visible_count()
        if n == 0:
            self._cursor = None
        elif self._cursor is None or self._cursor < 0:
            self._cursor = 0
        elif self._cursor >= n:
            self._cursor = n - 1
