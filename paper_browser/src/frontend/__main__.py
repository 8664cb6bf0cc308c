from __future__ import annotations
import argparse, json, sys

from paperlens.actions import Action, Context, SearchAction, action_for_key
from paperlens.config import TOP_K
from paperlens.engine import Browser
from paperlens.highlight import contains_any, index_spans
from frontend import initialize


def _render_title(title: str, positions: list[int]) -> str:
    return "".join(f"[{seg}]" if hit else seg for seg, hit in index_spans(title, positions))


def print_view(b: Browser, k: int, out=sys.stdout) -> None:
    mode = "search" if b.context is Context.SEARCH else b.context.value
    print(f"-- {mode} | query={b.session.query!r} | {b.visible_count()} visible", file=out)
    sel = b.selected_index()
    for pos, hit in enumerate(b.hits(limit=k)):
        mark = ">" if pos == sel else " "
        star = " *" if contains_any(hit.document.all_authors, b.config.highlight_authors) else ""
        print(f"{mark} {pos:<3} {hit.document.id:<14} {_render_title(hit.document.title, hit.highlight)}{star}", file=out)


def run_line(b: Browser, line: str, viewport: int) -> str | None:
    """
    One REPL line. ":<Key>" presses a key (Tk keysym, e.g. :slash :Down :Next
    :Escape :y); any other text is typed into the search one char at a time.
    Returns the yanked id when a yank happened.
    """
    if line.startswith(":") and len(line) > 1:
        key = line[1:]
        act = action_for_key(key, b.context, key if len(key) == 1 else "")
        if act is None:
            return None
        return b.perform(act, viewport)

    if b.context is not Context.SEARCH:
        b.perform(Action.SEARCH, viewport)
    for ch in line:
        b.perform(SearchAction.push(ch), viewport)
    return None


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Paper browser CLI (incremental fuzzy search)")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--corpus", nargs="+", help="Atom XML / JSON files or folders")
    src.add_argument("--synthetic", type=int, help="Use N generated demo articles")

    p.add_argument("--config", default=None, help="TOML config path")
    p.add_argument("--all", action="store_true", help="Keep revised entries (updated != published)")
    p.add_argument("-k", type=int, default=TOP_K, help="Rows to show")
    p.add_argument("--viewport", type=int, default=20, help="Viewport height for paging")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    b = initialize(paths=args.corpus, synthetic=args.synthetic, config_path=args.config,
                   only_new=not args.all, verbose=args.verbose)
    try:
        if args.q is not None:
            b.search(args.q)
            if args.json:
                print(json.dumps([h.to_dict() for h in b.hits(limit=args.k)], ensure_ascii=False, indent=2))
            elif b.visible_count() == 0:
                print("(no matches)")
            else:
                print_view(b, args.k)

        if args.repl:
            print("Type to search, ':<Key>' to press a key, empty line to exit.")
            while b.running:
                try:
                    line = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not line:
                    break
                yanked = run_line(b, line, args.viewport)
                if yanked is not None:
                    print(f"yanked: {yanked}")
                print_view(b, args.k)
        return 0
    finally:
        b.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
