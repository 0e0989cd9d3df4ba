"""Bookmark endpoints (saved jobs)."""

from fastapi import APIRouter, Depends

from job_finder.api.deps import get_preference_store
from job_finder.api.schemas import (
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkToggle,
    BookmarkToggleResponse,
)
from job_finder.models import GroundingSource
from job_finder.store import PreferenceStore

router = APIRouter()


def _bookmarks(store: PreferenceStore) -> list[BookmarkResponse]:
    return [BookmarkResponse.model_validate(s) for s in store.saved_jobs]


@router.get("", response_model=BookmarkListResponse)
def list_bookmarks(store: PreferenceStore = Depends(get_preference_store)):
    """List saved jobs in the order they were saved."""
    return BookmarkListResponse(bookmarks=_bookmarks(store))


@router.post("/toggle", response_model=BookmarkToggleResponse)
def toggle_bookmark(
    bookmark: BookmarkToggle,
    store: PreferenceStore = Depends(get_preference_store),
):
    """Save a job if it is not saved yet, otherwise remove it."""
    saved = store.toggle_save(GroundingSource(uri=bookmark.uri, title=bookmark.title))
    return BookmarkToggleResponse(uri=bookmark.uri, saved=saved, bookmarks=_bookmarks(store))


@router.get("/check")
def check_bookmark(
    uri: str,
    store: PreferenceStore = Depends(get_preference_store),
):
    """Check if a job is saved."""
    return {"bookmarked": store.is_saved(uri)}
