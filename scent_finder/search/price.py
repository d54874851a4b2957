"""
Purpose:
- Pull the first currency-prefixed amount ($, €, £) out of arbitrary page text.
- Only the first hit counts; no attempt to tell product prices from shipping costs.
"""

from __future__ import annotations
import re
from typing import Optional

PRICE_RE = re.compile(r"([$€£])\s?([0-9]+(?:[.,][0-9]{2})?)")
_WS_RE = re.compile(r"\s+")


def extract_price(text: Optional[str]) -> Optional[str]:
    """Return e.g. "$12.50" / "€9.99" (comma decimals become dots), or None."""
    if not text:
        return None
    m = PRICE_RE.search(_WS_RE.sub(" ", text))
    if not m:
        return None
    return f"{m.group(1)}{m.group(2).replace(',', '.')}"
