"""
Purpose:
- Turn a free-text scene description into a NoteSet (top / middle / base).
- Uses the local Ollama model; its reply is not guaranteed to be valid JSON.

Design:
- One fixed instruction prompt, low temperature, bounded reply length.
- Reply parsing is an ordered list of strategies; each returns a mapping or None ("try the next one").
    1. a JSON object ending at end-of-text
    2. the whole reply as JSON
    3. line heuristic: text after the first line mentioning a bucket label
- The heuristic always answers, so the worst case is three empty buckets (not an error).
- Model call failures (ModelCallError) propagate to the caller.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from ..search.schema import NoteSet
from .ollama import generate

logger = logging.getLogger(__name__)

BUCKETS = ("top", "middle", "base")
HEURISTIC_MAX_PER_BUCKET = 6

PROMPT_TEMPLATE = (
    "Extract 5-8 concise fragrance notes (top/middle/base) that match this scenic description. "
    "Return JSON with keys: top, middle, base (arrays of notes, lowercase). "
    "Keep common perfume taxonomy words only (e.g., bergamot, lemon, rose, jasmine, vetiver, amber, musk). "
    "No commentary.\n\nScene:\n{scene}"
)

_TRAILING_JSON_RE = re.compile(r"\{.*\}\Z", re.DOTALL)
_NON_NOTE_CHARS_RE = re.compile(r"[^a-z, ]")


def build_prompt(scene: str) -> str:
    return PROMPT_TEMPLATE.format(scene=scene)


def _as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        return None
    # models sometimes capitalize keys ("Top")
    return {str(k).strip().lower(): v for k, v in value.items()}


def _parse_trailing_json(text: str) -> Optional[Dict[str, Any]]:
    m = _TRAILING_JSON_RE.search(text)
    if not m:
        return None
    try:
        return _as_mapping(json.loads(m.group(0)))
    except ValueError:
        return None


def _parse_whole_json(text: str) -> Optional[Dict[str, Any]]:
    try:
        return _as_mapping(json.loads(text))
    except ValueError:
        return None


def _heuristic_bucket(lines: List[str], label: str) -> List[str]:
    idx = next((i for i, ln in enumerate(lines) if label in ln), None)
    if idx is None:
        return []
    rest = _NON_NOTE_CHARS_RE.sub("", " ".join(lines[idx + 1:]))
    parts = [p.strip() for p in rest.split(",")]
    return [p for p in parts if p][:HEURISTIC_MAX_PER_BUCKET]


def _parse_line_heuristic(text: str) -> Dict[str, Any]:
    lines = re.split(r"\n+", text.lower())
    return {label: _heuristic_bucket(lines, label) for label in BUCKETS}


PARSERS: List[Callable[[str], Optional[Dict[str, Any]]]] = [
    _parse_trailing_json,
    _parse_whole_json,
    _parse_line_heuristic,
]


def parse_notes_reply(raw: str) -> NoteSet:
    """Run the parser strategies in order; the first mapping wins. Never raises."""
    text = (raw or "").strip()
    for parser in PARSERS:
        parsed = parser(text)
        if parsed is None:
            continue
        if parser is not PARSERS[0]:
            logger.info(f"notes reply parsed by fallback {parser.__name__}")
        return NoteSet(**{label: parsed.get(label) for label in BUCKETS})
    return NoteSet()


def extract_notes(scene: str) -> NoteSet:
    """Scene text -> normalized NoteSet. The caller enforces the minimum scene length."""
    raw = generate(build_prompt(scene))
    notes = parse_notes_reply(raw)
    if notes.is_empty():
        logger.warning("model reply yielded no notes")
    return notes
