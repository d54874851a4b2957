"""
Purpose:
- Query Google Custom Search JSON API for web results.
- Restrict to the allow-list by appending an OR-combined "site:" clause to the query.
- Reduce each hit to {title, link, snippet}, in Google's order.

Notes:
- Requires: settings.google_api_key, settings.google_cse_cx (from .env or env)
- The API serves at most 10 items per request; we never ask for more than the caller's limit.
"""

from __future__ import annotations
import logging
from typing import Dict, List
import httpx
from .schema import SearchResult
from .whitelist import build_site_query, load_domains
from ..core.errors import SearchConfigError, SearchError
from ..core.settings import settings

logger = logging.getLogger(__name__)

GOOGLE_ENDPOINT = "https://www.googleapis.com/customsearch/v1"
GOOGLE_MAX_NUM = 10

def allowed_domains() -> List[str]:
    return load_domains(settings.search_whitelist_file, settings.search_domains)

def _api_params(query: str, api_key: str, cx: str, num: int) -> Dict[str, str]:
    return {
        "key": api_key,
        "cx": cx,
        "q": query,
        "num": str(min(num, GOOGLE_MAX_NUM)),
        "safe": "active",
        "lr": "lang_en",
    }

def google_search(query: str, limit: int = 6) -> List[SearchResult]:
    api_key = settings.google_api_key
    cx = settings.google_cse_cx
    if not api_key or not cx:
        raise SearchConfigError("Missing GOOGLE_API_KEY or GOOGLE_CSE_CX in environment.")
    if limit < 1:
        return []

    q = build_site_query(query, allowed_domains())
    logger.info(f"google search q={q!r} num={limit}")
    try:
        r = httpx.get(GOOGLE_ENDPOINT, params=_api_params(q, api_key, cx, limit), timeout=settings.search_timeout)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPStatusError as e:
        raise SearchError(f"search failed: HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, ValueError) as e:
        raise SearchError(f"search failed: {e}") from e

    results: List[SearchResult] = []
    for it in (data.get("items") or [])[:limit]:
        link = it.get("link")
        if not link:
            continue
        results.append(SearchResult(
            title=it.get("title") or "",
            link=link,
            snippet=it.get("snippet") or "",
        ))

    logger.info(f"google search returned {len(results)} results")
    return results
