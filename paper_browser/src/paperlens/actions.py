from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Context(Enum):
    ARTICLE_LIST = "article_list"
    SEARCH = "search"
    CONFIG = "config"
    HELP = "help"


class SearchOp(Enum):
    PUSH_CHAR = "push_char"
    POP_CHAR = "pop_char"
    CLEAR = "clear"


@dataclass(frozen=True)
class SearchAction:
    """A keystroke routed to the query buffer; `char` is set only for PUSH_CHAR."""
    op: SearchOp
    char: Optional[str] = None

    @classmethod
    def push(cls, c: str) -> "SearchAction":
        return cls(SearchOp.PUSH_CHAR, c)

    @classmethod
    def pop(cls) -> "SearchAction":
        return cls(SearchOp.POP_CHAR)

    @classmethod
    def clear(cls) -> "SearchAction":
        return cls(SearchOp.CLEAR)


class Action(Enum):
    QUIT = "Quit"
    MOVE_UP = "Up"
    MOVE_DOWN = "Down"
    PAGE_UP = "Page Up"
    PAGE_DOWN = "Page Down"
    GO_TO_TOP = "Go to Top"
    GO_TO_BOTTOM = "Go to Bottom"
    TOGGLE_CONFIG = "Config"
    SHOW_HELP = "Help"
    YANK_ID = "Yank"
    CLOSE_POPUP = "Close/Quit"
    SEARCH = "Search"
    TOGGLE_FOCUS = "Toggle Focus"

    @property
    def description(self) -> str:
        return self.value

    def is_valid_in(self, context: Context) -> bool:
        if self in _LIST_ONLY:
            return context is Context.ARTICLE_LIST
        return True


_LIST_ONLY = frozenset({
    Action.MOVE_UP, Action.MOVE_DOWN, Action.PAGE_UP, Action.PAGE_DOWN,
    Action.GO_TO_TOP, Action.GO_TO_BOTTOM, Action.YANK_ID,
})


@dataclass(frozen=True)
class KeyBind:
    key: str            # Tk-style keysym ("q", "Escape", "Next", ...)
    action: Action
    is_primary: bool = False   # shown in the footer / help line


# Key names follow Tk keysyms so the GUI can look up event.keysym directly.
KEY_MAP: tuple[KeyBind, ...] = (
    KeyBind("q", Action.QUIT, True),
    KeyBind("Escape", Action.CLOSE_POPUP),
    KeyBind("k", Action.MOVE_UP),
    KeyBind("Up", Action.MOVE_UP),
    KeyBind("j", Action.MOVE_DOWN),
    KeyBind("Down", Action.MOVE_DOWN),
    KeyBind("u", Action.PAGE_UP),
    KeyBind("Prior", Action.PAGE_UP),
    KeyBind("d", Action.PAGE_DOWN),
    KeyBind("Next", Action.PAGE_DOWN),
    KeyBind("g", Action.GO_TO_TOP),
    KeyBind("Home", Action.GO_TO_TOP),
    KeyBind("G", Action.GO_TO_BOTTOM),
    KeyBind("End", Action.GO_TO_BOTTOM),
    KeyBind("c", Action.TOGGLE_CONFIG, True),
    KeyBind("question", Action.SHOW_HELP, True),
    KeyBind("y", Action.YANK_ID, True),
    KeyBind("slash", Action.SEARCH, True),
    KeyBind("Tab", Action.TOGGLE_FOCUS),
)

_BY_KEY = {kb.key: kb.action for kb in KEY_MAP}


def action_for_key(key: str, context: Context, char: str = "") -> Optional[Action | SearchAction]:
    """
    Map a key to what it should do in `context`.

    In SEARCH every printable character goes to the query and BackSpace pops.
    Escape closes search; Return or Tab hands focus back to the list. Elsewhere KEY_MAP decides, and actions not
    valid in the context are dropped (None).
    """
    if context is Context.SEARCH:
        if key == "Escape":
            return Action.CLOSE_POPUP
        if key in ("Return", "Tab"):
            return Action.TOGGLE_FOCUS
        if key == "BackSpace":
            return SearchAction.pop()
        if char and char.isprintable() and len(char) == 1:
            return SearchAction.push(char)
        return None

    action = _BY_KEY.get(key)
    if action is None or not action.is_valid_in(context):
        return None
    return action


def primary_bindings() -> list[KeyBind]:
    return [kb for kb in KEY_MAP if kb.is_primary]
