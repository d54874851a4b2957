"""
Purpose:
- Load and normalize the domain allow-list from config + an optional file.
- Render it as a Google "site:" restriction appended to a query.
"""

from __future__ import annotations
from typing import List, Optional
from urllib.parse import urlparse
from pathlib import Path

def _read_lines(path: Optional[Path]) -> List[str]:
    try:
        if path is None or not path.exists():
            return []
        text = path.read_text(encoding="utf-8", errors="ignore")
        return [ln.strip() for ln in text.splitlines() if ln.strip() and not ln.strip().startswith("#")]
    except OSError:
        return []

def _extract_domain(entry: str) -> str:
    # accept bare domains ("parfumo.net") as well as full URLs
    netloc = urlparse(entry if "://" in entry else f"//{entry}").netloc.lower()
    # strip leading "www."
    if netloc.startswith("www."):
        netloc = netloc[4:]
    return netloc

def load_domains(file_path: Optional[Path], default_domains: List[str]) -> List[str]:
    """
    Merge configured domains with a text file (one URL or domain per line).
    De-duplicates and normalizes, keeping first-seen order.
    """
    entries = list(default_domains) + _read_lines(file_path)
    domains = [_extract_domain(e) for e in entries]
    return list(dict.fromkeys(d for d in domains if d))

def build_site_query(query: str, domains: List[str]) -> str:
    """'rose musk perfume' -> 'rose musk perfume (site:a.com OR site:b.net)'."""
    if not domains:
        return query
    sites = " OR ".join(f"site:{d}" for d in domains)
    return f"{query} ({sites})"
