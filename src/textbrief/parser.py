from __future__ import annotations
from pathlib import Path
from bs4 import BeautifulSoup
from bs4.builder import builder_registry

HTML_SUFFIXES = {".html", ".htm", ".xhtml"}
_SKIP = ["script", "style", "noscript", "template", "nav", "footer"]
_BLOCKS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "li", "blockquote", "pre", "td"]


def _get_text(el) -> str:
    return (el.get_text(" ", strip=True) if el else "").strip()


def html_to_text(html: str) -> str:
    """Visible text of an HTML document, one paragraph per block element."""
    soup = BeautifulSoup(html, "lxml" if builder_registry.lookup("lxml") else "html.parser")
    for el in soup.find_all(_SKIP):
        el.decompose()
    # nested blocks (li > p) would repeat text, so only take outermost ones
    blocks = [el for el in soup.find_all(_BLOCKS) if not el.find_parent(_BLOCKS)]
    if not blocks:
        return _get_text(soup.body or soup)
    return "\n\n".join(t for t in (_get_text(b) for b in blocks) if t)


def read_input(path: Path) -> str:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in HTML_SUFFIXES:
        return html_to_text(raw)
    return raw
