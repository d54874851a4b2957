"""
Purpose:
- Expose /api/* endpoints backing the notes -> search -> scrape pipeline.
- Stage failures bubble up as ScentFinderError and are mapped to HTTP errors in main.py.
"""

from fastapi import APIRouter
from ..search.schema import (
    FindResponse,
    NotesRequest,
    NotesResponse,
    SceneRequest,
    SuggestionsResponse,
)
from ..search.service import extract_notes, find_from_scene, find_suggestions

router = APIRouter(prefix="/api", tags=["search"])

@router.post("/extract-notes", response_model=NotesResponse)
def extract_notes_route(payload: SceneRequest):
    """Scene -> notes only; lets the UI show/edit notes before searching."""
    return NotesResponse(notes=extract_notes(payload.scene))

@router.post("/search", response_model=SuggestionsResponse)
def search_route(payload: NotesRequest):
    return find_suggestions(payload.notes)

@router.post("/find", response_model=FindResponse)
def find_route(payload: SceneRequest):
    """Full pipeline: scene -> notes -> query -> search -> scrape."""
    return find_from_scene(payload.scene)
