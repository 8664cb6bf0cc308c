# app.py
# CustomTkinter desktop paper browser (dark theme, ZIP-aware).
# - Load feeds from a folder OR a ZIP archive (ZIP extracted safely to a temp dir).
# - Background loading thread; the Browser itself is only touched on the Tk thread.
# - Keyboard driven: "/" searches, every keystroke re-ranks, j/k/PgUp/PgDn move.

from __future__ import annotations
import os
import shutil
import threading
import zipfile
import tempfile
from typing import Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (pip install -e . or PYTHONPATH=src)
from paperlens.actions import Action, Context, action_for_key, primary_bindings
from paperlens.config import load_config
from paperlens.engine import Browser
from paperlens.highlight import contains_any, index_spans, pattern_spans
from paperlens.loader import load_corpus
from paperlens.models import Corpus


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def safe_extract_zip(zip_path: str, dest_dir: str) -> None:
    """
    Extract zip contents to dest_dir with basic zip-slip protection.
    Only ensures members stay within dest_dir (no absolute paths / .. traversal).
    """
    dest_abs = os.path.abspath(dest_dir)
    with zipfile.ZipFile(zip_path) as zf:
        for info in zf.infolist():
            target = os.path.abspath(os.path.join(dest_abs, info.filename))
            if target != dest_abs and not target.startswith(dest_abs + os.sep):
                raise RuntimeError(f"Unsafe zip entry: {info.filename!r}")
        zf.extractall(dest_abs)


# -------------------- main app --------------------

class PaperBrowserApp(ctk.CTk):
    """Dark-themed GUI over paperlens.Browser."""

    ROW_HEIGHT_PX = 22

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Paper Browser")
        self.geometry("980x700")
        self.minsize(820, 560)

        # State
        self.cfg = load_config()
        self.browser = Browser(self.cfg)
        self._loading_thread: Optional[threading.Thread] = None
        self._tmpdir_path: Optional[str] = None  # holds extracted ZIP dir

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=3)  # list
        self.grid_rowconfigure(4, weight=2)  # detail

        self._build_header()
        self._build_source_bar()
        self._build_search()
        self._build_list()
        self._build_detail()
        self._build_footer()

        self.bind("<Key>", self._on_key)
        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(header, text=f"Paper Browser · {self.cfg.category}", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(2, weight=1)

        ctk.CTkButton(bar, text="Choose Folder", command=self._choose_folder).grid(
            row=0, column=0, padx=(12, 6), pady=10
        )
        ctk.CTkButton(bar, text="Choose ZIP", command=self._choose_zip).grid(
            row=0, column=1, padx=(0, 6), pady=10, sticky="w"
        )
        self.lbl_source = ctk.CTkLabel(bar, text="No source selected", anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=2, sticky="ew", padx=6, pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=3, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=4, sticky="e", padx=12, pady=10)

    def _build_search(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(0, weight=1)
        # Display only: keystrokes go through Browser so ranking and cursor stay in sync
        self.lbl_query = ctk.CTkLabel(box, text="Press / to search", anchor="w", font=self.font_mono)
        self.lbl_query.grid(row=0, column=0, sticky="ew", padx=12, pady=10)

    def _build_list(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(0, weight=1)

        self.txt_list = ctk.CTkTextbox(frame, wrap="none", font=self.font_mono)
        self.txt_list.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self.txt_list.tag_config("cursor", background="#1f3b57")
        self.txt_list.tag_config("hit", foreground="#6ee7ff")
        self.txt_list.tag_config("author", foreground="#ffd166")
        self.txt_list.configure(state="disabled")

    def _build_detail(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(0, weight=1)
        self.txt_detail = ctk.CTkTextbox(frame, wrap="word", font=ctk.CTkFont(size=13))
        self.txt_detail.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self.txt_detail.tag_config("kw", foreground="#6ee7ff")
        self.txt_detail.configure(state="disabled")

    def _build_footer(self) -> None:
        hints = "  ".join(f"{kb.key}: {kb.action.description}" for kb in primary_bindings())
        self.lbl_footer = ctk.CTkLabel(self, text=hints, anchor="w", font=ctk.CTkFont(size=12))
        self.lbl_footer.grid(row=5, column=0, sticky="ew", padx=16, pady=(0, 10))

    # --------- source selection ---------

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose feed folder")
        if path:
            self._start_loading(mode="folder", source=path)

    def _choose_zip(self) -> None:
        path = fd.askopenfilename(
            title="Choose feed ZIP",
            filetypes=[("ZIP archives", "*.zip"), ("All files", "*.*")]
        )
        if path:
            self._start_loading(mode="zip", source=path)

    # --------- loading pipeline (threaded) ---------

    def _start_loading(self, mode: str, source: str) -> None:
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "A corpus is already loading. Please wait.")
            return

        self._cleanup_tmpdir()
        tag = "ZIP" if mode == "zip" else "Folder"
        self.lbl_source.configure(text=f"{tag}: {shorten_path(source)}")
        self._set_status(f"Loading from {tag.lower()}…")
        self.progress.start()

        self._loading_thread = threading.Thread(
            target=self._load_worker, args=(mode, source), daemon=True
        )
        self._loading_thread.start()

    def _load_worker(self, mode: str, source: str) -> None:
        # Worker thread: only file I/O and parsing; the Corpus is handed over via after()
        try:
            if mode == "zip":
                tmpdir = tempfile.mkdtemp(prefix="paperlens_feeds_")
                try:
                    safe_extract_zip(source, tmpdir)
                except Exception:
                    shutil.rmtree(tmpdir, ignore_errors=True)
                    raise
                self._tmpdir_path = tmpdir
                roots = [tmpdir]
            else:
                roots = [source]
            corpus = load_corpus(roots)
        except Exception as exc:
            self.after(0, self._on_load_error, exc)
            return
        self.after(0, self._on_load_ok, corpus)

    def _on_load_ok(self, corpus: Corpus) -> None:
        self.progress.stop()
        self.browser.load(corpus)
        self._set_status(f"Loaded {len(corpus):,} articles.")
        self._refresh()
        self.focus_set()

    def _on_load_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while loading corpus.")
        mb.showerror("Load error", f"Failed to load corpus.\n{exc}")

    # --------- keyboard ---------

    def _viewport_rows(self) -> int:
        return max(1, self.txt_list.winfo_height() // self.ROW_HEIGHT_PX)

    def _on_key(self, ev) -> None:
        if self.browser.corpus is None:
            return
        act = action_for_key(ev.keysym, self.browser.context, ev.char)
        if act is None:
            return
        yanked = self.browser.perform(act, self._viewport_rows())
        if yanked is not None:
            self.clipboard_clear()
            self.clipboard_append(yanked)
            self._set_status(f"Yanked {yanked}")
        if act is Action.QUIT or not self.browser.running:
            self._on_close()
            return
        self._refresh()

    # --------- rendering ---------

    def _refresh(self) -> None:
        b = self.browser
        if b.context is Context.SEARCH:
            self.lbl_query.configure(text=f"/{b.session.query}▏  ({b.visible_count()} matches)")
        elif b.session.is_active():
            self.lbl_query.configure(text=f"/{b.session.query}")
        else:
            self.lbl_query.configure(text="Press / to search")

        sel = b.selected_index()
        authors = self.cfg.highlight_authors
        self.txt_list.configure(state="normal")
        self.txt_list.delete("0.0", "end")
        for pos, hit in enumerate(b.hits(limit=None)):
            line_start = self.txt_list.index("end-1c")
            for seg, on in index_spans(hit.document.title, hit.highlight):
                self.txt_list.insert("end", seg, ("hit",) if on else ())
            if contains_any(hit.document.all_authors, authors):
                self.txt_list.insert("end", "  ★", ("author",))
            self.txt_list.insert("end", "\n")
            if pos == sel:
                self.txt_list.tag_add("cursor", line_start, f"{line_start} lineend")
        self.txt_list.configure(state="disabled")
        if sel is not None:
            self.txt_list.see(f"{sel + 1}.0")

        doc = b.selected_document()
        self.txt_detail.configure(state="normal")
        self.txt_detail.delete("0.0", "end")
        if doc is not None:
            self.txt_detail.insert("end", f"{doc.title}\n{doc.all_authors}\n{doc.id}\n\n")
            for seg, on in pattern_spans(doc.body, self.cfg.highlight_keywords):
                self.txt_detail.insert("end", seg, ("kw",) if on else ())
        self.txt_detail.configure(state="disabled")

        if b.context is Context.HELP:
            self._set_status("Keys: " + ", ".join(f"{kb.key}={kb.action.description}" for kb in primary_bindings()))

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    # --------- lifecycle ---------

    def _cleanup_tmpdir(self) -> None:
        if self._tmpdir_path and os.path.isdir(self._tmpdir_path):
            try:
                shutil.rmtree(self._tmpdir_path, ignore_errors=True)
            finally:
                self._tmpdir_path = None

    def _on_close(self) -> None:
        self.browser.shutdown()
        self._cleanup_tmpdir()
        self.destroy()


if __name__ == "__main__":
    app = PaperBrowserApp()
    app.mainloop()
