from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from paperlens.config import TOP_K
from paperlens.engine import Browser
from frontend import initialize

app = Flask(__name__)
_browser: Browser | None = None


def _not_ready():
    return jsonify({"ok": False, "error": "no corpus loaded"}), 503


# ---------- API ----------
@app.get("/api/search")
def api_search():
    if _browser is None:
        return _not_ready()
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    if k is None or k < 1:
        return jsonify({"ok": False, "error": "k must be a positive integer"}), 400
    _browser.search(q)
    return jsonify([h.to_dict() for h in _browser.hits(limit=k)])


@app.get("/api/documents/<int:idx>")
def api_document(idx: int):
    if _browser is None:
        return _not_ready()
    docs = _browser.documents
    if idx >= len(docs):
        return jsonify({"ok": False, "error": f"no document {idx}"}), 404
    d = docs[idx]
    return jsonify({"corpus_index": idx, "id": d.id, "title": d.title, "authors": list(d.authors),
                    "summary": d.body, "updated": d.updated, "published": d.published})


@app.get("/health")
def health():
    if _browser is None:
        return _not_ready()
    return jsonify({"ok": True, "articles": len(_browser.documents)})


# ---------- UI ----------
@app.get("/")
def home():
    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Paper browser</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --accent-2:#22d3ee; --border:#1c2530; --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
.input input{ width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px; }
.input input:focus{ border-color:var(--accent) }
.meta{ display:flex; justify-content:space-between; color:var(--muted); font-size:13px; margin-top:6px; }
.results{ margin-top:16px; border-radius:12px; border:1px solid var(--border); }
.row{ padding:10px 14px; border-top:1px solid var(--border); cursor:pointer }
.row:first-child{ border-top:none }
.row.sel{ background:#0d131a; border-left:3px solid var(--accent) }
.small{ color:var(--muted); font-size:13px }
.mark{ background:var(--mark-bg); border-bottom:1px solid var(--accent-2) }
.empty{ padding:24px; text-align:center; color:var(--muted); }
.detail{ margin-top:16px; white-space:pre-wrap }
kbd{ background:#111825; border:1px solid var(--border); padding:1px 6px; border-radius:6px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Paper browser</h1>
      <div class="input"><input id="q" type="text" placeholder="Type to filter…" autocomplete="off" autofocus /></div>
      <div class="meta">
        <div id="stats">Ready.</div>
        <div><kbd>↑</kbd>/<kbd>↓</kbd> move • <kbd>Esc</kbd> clear</div>
      </div>
      <div class="results"><div id="out" class="empty">Loading…</div></div>
      <div id="detail" class="detail small"></div>
    </div>
  </div>
<script>
const $ = (s) => document.querySelector(s);
const q = $("#q"), out = $("#out"), stats = $("#stats"), detail = $("#detail");
let rows = [], sel = 0, t;

function esc(s){ return s.replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function marked(text, idx){
  const set = new Set(idx); let html = "";
  [...text].forEach((ch, i) => { html += set.has(i) ? `<span class="mark">${esc(ch)}</span>` : esc(ch); });
  return html;
}
function render(){
  if(rows.length === 0){ out.className = "empty"; out.innerHTML = "No matches."; detail.textContent = ""; return; }
  sel = Math.min(Math.max(sel, 0), rows.length - 1);
  out.className = "";
  out.innerHTML = rows.map((r, i) => `
    <div class="row${i === sel ? " sel" : ""}" data-i="${i}">
      <div>${marked(r.title, r.highlight)}</div>
      <div class="small">${esc(r.authors.join(", "))} • ${esc(r.id)}</div>
    </div>`).join("");
  const r = rows[sel];
  detail.textContent = r ? r.summary : "";
}
async function search(){
  const resp = await fetch(`/api/search?q=${encodeURIComponent(q.value)}&k=50`);
  rows = resp.ok ? await resp.json() : [];
  sel = 0;   // the ranked list can reorder on every keystroke: snap to the top
  stats.textContent = q.value ? `Results: ${rows.length}` : `All articles (${rows.length} shown)`;
  render();
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 80); });
out.addEventListener("click", (ev) => { const el = ev.target.closest(".row"); if(el){ sel = +el.dataset.i; render(); } });
window.addEventListener("keydown", (ev) => {
  if(ev.key === "ArrowDown"){ sel++; render(); ev.preventDefault(); }
  else if(ev.key === "ArrowUp"){ sel--; render(); ev.preventDefault(); }
  else if(ev.key === "Escape"){ q.value = ""; search(); }
});
search();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask UI on top of a Browser")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--corpus", nargs="+")
    src.add_argument("--synthetic", type=int)
    ap.add_argument("--config", default=None)
    ap.add_argument("--all", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _browser
    _browser = initialize(paths=args.corpus, synthetic=args.synthetic, config_path=args.config,
                          only_new=not args.all, verbose=args.verbose)
    try:
        # one Browser, one thread: requests must not interleave mid-rank
        app.run(host=args.host, port=args.port, debug=args.verbose, threaded=False)
    finally:
        _browser.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
