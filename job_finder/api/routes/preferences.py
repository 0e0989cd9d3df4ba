"""Theme preference endpoints."""

from fastapi import APIRouter, Depends

from job_finder.api.deps import get_preference_store
from job_finder.api.schemas import ThemeResponse, ThemeUpdate
from job_finder.store import PreferenceStore

router = APIRouter()


@router.get("/theme", response_model=ThemeResponse)
def get_theme(store: PreferenceStore = Depends(get_preference_store)):
    """Get the stored theme, or the default when none is stored."""
    return ThemeResponse(theme=store.theme)


@router.put("/theme", response_model=ThemeResponse)
def update_theme(
    data: ThemeUpdate,
    store: PreferenceStore = Depends(get_preference_store),
):
    """Set the theme."""
    return ThemeResponse(theme=store.set_theme(data.theme))


@router.post("/theme/toggle", response_model=ThemeResponse)
def toggle_theme(store: PreferenceStore = Depends(get_preference_store)):
    """Switch between dark and light."""
    return ThemeResponse(theme=store.toggle_theme())
