# src/e2e/test_actions_keymap.py

from paperlens.actions import (
    Action, Context, KEY_MAP, SearchAction, SearchOp, action_for_key, primary_bindings,
)


def test_list_keys():
    assert action_for_key("j", Context.ARTICLE_LIST) is Action.MOVE_DOWN
    assert action_for_key("Down", Context.ARTICLE_LIST) is Action.MOVE_DOWN
    assert action_for_key("k", Context.ARTICLE_LIST) is Action.MOVE_UP
    assert action_for_key("Next", Context.ARTICLE_LIST) is Action.PAGE_DOWN
    assert action_for_key("Prior", Context.ARTICLE_LIST) is Action.PAGE_UP
    assert action_for_key("G", Context.ARTICLE_LIST) is Action.GO_TO_BOTTOM
    assert action_for_key("slash", Context.ARTICLE_LIST) is Action.SEARCH
    assert action_for_key("y", Context.ARTICLE_LIST) is Action.YANK_ID
    assert action_for_key("x", Context.ARTICLE_LIST) is None


def test_search_context_types_instead_of_moving():
    assert action_for_key("j", Context.SEARCH, "j") == SearchAction.push("j")
    assert action_for_key("q", Context.SEARCH, "q") == SearchAction(SearchOp.PUSH_CHAR, "q")
    assert action_for_key("space", Context.SEARCH, " ") == SearchAction.push(" ")
    assert action_for_key("BackSpace", Context.SEARCH, "\x08") == SearchAction.pop()
    assert action_for_key("Escape", Context.SEARCH) is Action.CLOSE_POPUP
    assert action_for_key("Return", Context.SEARCH, "\r") is Action.TOGGLE_FOCUS
    assert action_for_key("Tab", Context.SEARCH, "\t") is Action.TOGGLE_FOCUS
    assert action_for_key("Shift_L", Context.SEARCH, "") is None


def test_navigation_dropped_in_popups():
    assert action_for_key("j", Context.HELP) is None
    assert action_for_key("y", Context.CONFIG) is None
    assert action_for_key("question", Context.HELP) is Action.SHOW_HELP
    assert action_for_key("Escape", Context.CONFIG) is Action.CLOSE_POPUP


def test_validity_table():
    for action in Action:
        assert action.is_valid_in(Context.ARTICLE_LIST)
    assert not Action.MOVE_DOWN.is_valid_in(Context.SEARCH)
    assert Action.QUIT.is_valid_in(Context.HELP)


def test_primary_bindings_for_footer():
    keys = {kb.key for kb in primary_bindings()}
    assert keys == {"q", "c", "question", "y", "slash"}
    assert all(kb.action.description for kb in KEY_MAP)
