"""
Purpose:
- The "service" orchestrates scene -> notes -> query -> search -> scrape -> suggestions.
- Scrapes fan out on a thread pool and are joined all-settled, in search-result order.
- Stage failures (model, search config/transport) propagate; per-page failures never do.
"""

from __future__ import annotations
import concurrent.futures
import logging
from typing import List, Optional, Sequence
from .fetcher import scrape
from .google_cse import google_search
from .schema import FindResponse, NoteSet, ScrapeResult, SearchResult, Suggestion, SuggestionsResponse
from ..core.settings import settings
from ..services.notes import extract_notes
from ..services.query_gen import build_query

logger = logging.getLogger(__name__)

__all__ = ["assemble_suggestions", "extract_notes", "find_from_scene", "find_suggestions", "scrape_all"]

def scrape_all(urls: Sequence[str]) -> List[ScrapeResult]:
    """
    Scrape every URL at once (one worker per URL; the search cap keeps this small) and wait for all of them.
    Result i always belongs to urls[i]; a task that blows up becomes ok=False instead of aborting the batch.
    """
    if not urls:
        return []
    out: List[ScrapeResult] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(urls)) as executor:
        futures = [executor.submit(scrape, u) for u in urls]
        for url, future in zip(urls, futures):
            try:
                out.append(future.result())
            except Exception as e:
                logger.warning(f"scrape task crashed url={url}: {e!r}")
                out.append(ScrapeResult(url=url, ok=False, error=str(e) or e.__class__.__name__))
    return out

def assemble_suggestions(results: Sequence[SearchResult], scraped: Sequence[ScrapeResult]) -> List[Suggestion]:
    """Merge search hit i with scrape i; failed scrapes leave price/sourceTitle empty."""
    suggestions: List[Suggestion] = []
    for i, r in enumerate(results):
        s = scraped[i] if i < len(scraped) else None
        good = s is not None and s.ok
        suggestions.append(Suggestion(
            title=r.title,
            url=r.link,
            snippet=r.snippet,
            price=s.price if good else None,
            source_title=s.title if good else None,
            notes=list(s.notes) if good else [],
        ))
    return suggestions

def find_suggestions(notes: NoteSet, limit: Optional[int] = None) -> SuggestionsResponse:
    query = build_query(notes)
    results = google_search(query, limit or settings.search_max_results)
    scraped = scrape_all([r.link for r in results])
    failed = sum(1 for s in scraped if not s.ok)
    if failed:
        logger.info(f"{failed}/{len(scraped)} pages could not be scraped")
    return SuggestionsResponse(query=query, suggestions=assemble_suggestions(results, scraped))

def find_from_scene(scene: str, limit: Optional[int] = None) -> FindResponse:
    notes = extract_notes(scene)
    found = find_suggestions(notes, limit=limit)
    return FindResponse(notes=notes, query=found.query, suggestions=found.suggestions)
