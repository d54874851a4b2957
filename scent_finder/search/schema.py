"""
Purpose:
- Pydantic models for the notes -> search -> scrape pipeline so the API is self-documenting and stable.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional

MAX_NOTES_PER_BUCKET = 8


def normalize_bucket(values: Any) -> List[str]:
    """
    Lower-case, trim, drop empties, de-duplicate (first occurrence wins) and cap.
    Accepts a list of notes or a comma separated string; anything else is an empty bucket.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    if not isinstance(values, (list, tuple)):
        return []
    cleaned = [v.strip().lower() for v in values if isinstance(v, str)]
    return list(dict.fromkeys(v for v in cleaned if v))[:MAX_NOTES_PER_BUCKET]


class NoteSet(BaseModel):
    top: List[str] = Field(default_factory=list)
    middle: List[str] = Field(default_factory=list)
    base: List[str] = Field(default_factory=list)

    @field_validator("top", "middle", "base", mode="before")
    @classmethod
    def _normalize(cls, v):
        return normalize_bucket(v)

    def is_empty(self) -> bool:
        return not (self.top or self.middle or self.base)


class SearchResult(BaseModel):
    title: str = ""
    link: str
    snippet: str = ""


class ScrapeResult(BaseModel):
    url: str
    ok: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    notes: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class Suggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = ""
    url: str
    snippet: str = ""
    price: Optional[str] = None
    source_title: Optional[str] = Field(default=None, alias="sourceTitle")
    notes: List[str] = Field(default_factory=list)


# --- request / response shapes ----------------------------------------------

class SceneRequest(BaseModel):
    scene: str = Field(..., min_length=5, description="Scene description (min 5 chars)")

class NotesRequest(BaseModel):
    notes: NoteSet

class NotesResponse(BaseModel):
    notes: NoteSet

class SuggestionsResponse(BaseModel):
    query: str
    suggestions: List[Suggestion] = []

class FindResponse(BaseModel):
    notes: NoteSet
    query: str
    suggestions: List[Suggestion] = []
