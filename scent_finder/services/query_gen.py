"""
Purpose:
- Turn a NoteSet into one concise web-search query for perfume products.

Design:
- Up to 3 notes per bucket, in top -> middle -> base order, plus "perfume with price".
- If that somehow ends up too short to be useful, fall back to a single bucket + "perfume".
"""

from __future__ import annotations
import re

from ..search.schema import NoteSet

NOTES_PER_BUCKET = 3
MIN_QUERY_CHARS = 10

def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()

def build_query(notes: NoteSet) -> str:
    """
    {top: [bergamot, lemon], middle: [], base: [musk]}
      -> "bergamot lemon musk perfume with price"
    """
    parts = [
        " ".join(notes.top[:NOTES_PER_BUCKET]),
        " ".join(notes.middle[:NOTES_PER_BUCKET]),
        " ".join(notes.base[:NOTES_PER_BUCKET]),
    ]
    q = _squash(f"{' '.join(parts)} perfume with price")
    if len(q) < MIN_QUERY_CHARS:
        # Last resort: whichever single bucket has anything (middle preferred)
        bucket = notes.middle or notes.top or notes.base
        q = _squash(f"{' '.join(bucket)} perfume")
    return q
