"""
Purpose:
- Fetch a search hit's page and scrape title, description, price and fragrance notes.
- Best-effort: every failure path resolves to ScrapeResult(ok=False); nothing is raised.

Extraction order:
- title: og:title -> <title>
- description: meta description -> og:description -> ""
- price: itemprop=offers -> itemprop=price -> first *price* class -> first *price* id -> page text
- notes: first selector in NOTE_SELECTORS that yields anything wins
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Iterable, List, Optional
import httpx
from selectolax.parser import HTMLParser, Node
from ..core.settings import settings
from .price import extract_price
from .schema import ScrapeResult

logger = logging.getLogger(__name__)

# Known shapes of note listings (Fragrantica pyramid, Parfumo/Basenotes lists), highest priority first.
NOTE_SELECTORS = (
    "div#pyramid div.pyramid__note",
    "div#pyramid div.note",
    "div.notes",
    "div.accords",
    "ul.notes li",
    "div#notes li",
    "div.basenotes",
)
MAX_NOTE_CHARS = 60
MAX_PAGE_NOTES = 20

_WS_RE = re.compile(r"\s+")

def _clean(text: Optional[str]) -> str:
    return _WS_RE.sub(" ", text or "").strip()

def _node_text(node: Optional[Node]) -> str:
    # children space-joined so nested note markup does not run words together
    return _clean(node.text(separator=" ")) if node is not None else ""

def _content_text(node: Optional[Node]) -> str:
    # raw text content, children concatenated as-is ("$12<sup>.50</sup>" -> "$12.50")
    return node.text(deep=True) if node is not None else ""

def _meta(tree: HTMLParser, selector: str) -> str:
    node = tree.css_first(selector)
    if node is None:
        return ""
    return _clean(node.attributes.get("content"))

def _is_textual(content_type: str) -> bool:
    # no header: let the parser decide
    if not content_type:
        return True
    ct = content_type.lower()
    return ct.startswith("text/") or "html" in ct or "xml" in ct

# --- price -------------------------------------------------------------------

def _all_text(selector: str) -> Callable[[HTMLParser], str]:
    return lambda tree: _clean("".join(_content_text(n) for n in tree.css(selector)))

def _first_text(selector: str) -> Callable[[HTMLParser], str]:
    return lambda tree: _clean(_content_text(tree.css_first(selector)))

PRICE_CANDIDATES = (
    _all_text('[itemprop="offers"]'),
    _all_text('[itemprop="price"]'),
    _first_text('[class*="price"]'),
    _first_text('[id*="price"]'),
    lambda tree: _clean(_content_text(tree.body)),
)

def _extract_page_price(tree: HTMLParser) -> Optional[str]:
    prices = (extract_price(candidate(tree)) for candidate in PRICE_CANDIDATES)
    return next((p for p in prices if p), None)

# --- notes -------------------------------------------------------------------

def _collect_notes(tree: HTMLParser, selector: str) -> List[str]:
    texts = (_node_text(n) for n in tree.css(selector))
    kept = [t for t in texts if t and len(t) < MAX_NOTE_CHARS]
    return list(dict.fromkeys(kept))[:MAX_PAGE_NOTES]

def _extract_page_notes(tree: HTMLParser, selectors: Iterable[str] = NOTE_SELECTORS) -> List[str]:
    found = (_collect_notes(tree, sel) for sel in selectors)
    return next((notes for notes in found if notes), [])

# --- page --------------------------------------------------------------------

def parse_page(url: str, html: str) -> ScrapeResult:
    """Extract everything we know how to find from an already-fetched document."""
    tree = HTMLParser(html)
    # only visible text should feed the page-wide price fallback
    tree.strip_tags(["script", "style", "noscript", "template"])

    title = _meta(tree, 'meta[property="og:title"]') or _node_text(tree.css_first("title"))
    description = (
        _meta(tree, 'meta[name="description"]')
        or _meta(tree, 'meta[property="og:description"]')
    )
    return ScrapeResult(
        url=url,
        ok=True,
        title=title or None,
        description=description,
        price=_extract_page_price(tree),
        notes=_extract_page_notes(tree),
    )

def scrape(url: str) -> ScrapeResult:
    """
    Fetch one URL and scrape it. Any HTTP status is accepted as input;
    non-textual or empty bodies give ok=False without an error message.
    """
    headers = {
        "User-Agent": settings.scrape_user_agent,
        "Accept-Language": "en-US,en;q=0.9",
    }
    try:
        resp = httpx.get(url, headers=headers, timeout=settings.scrape_timeout, follow_redirects=True)
        if not resp.content or not _is_textual(resp.headers.get("content-type", "")):
            logger.info(f"scrape skipped non-text body url={url} status={resp.status_code}")
            return ScrapeResult(url=url, ok=False)
        return parse_page(str(resp.url) or url, resp.text)
    except Exception as e:
        logger.warning(f"scrape failed url={url}: {e!r}")
        return ScrapeResult(url=url, ok=False, error=str(e) or e.__class__.__name__)
