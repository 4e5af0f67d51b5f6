from typing import Optional

from fastapi import APIRouter, Depends

from gozleme_finder.core.errors import InputValidationError
from gozleme_finder.models.places_model import ToggleRequest
from gozleme_finder.models.spot_model import AdminSpotsResponse, CachedSpotsResponse, ToggleResponse
from gozleme_finder.repos.spot_repo import SpotRepository
from gozleme_finder.routes.deps import get_spot_repo

router = APIRouter(prefix="/api")


# --- Public ---
@router.get("/cached-spots", response_model=CachedSpotsResponse)
def cached_spots(repo: SpotRepository = Depends(get_spot_repo)):
    """Pre-built AI results without hidden spots; empty until the cache is built."""
    cache = repo.load_cache()
    if cache is None:
        return CachedSpotsResponse(spots=[], built_at=None)
    visible = [spot for spot in cache.spots if not spot.hidden]
    return CachedSpotsResponse(spots=visible, built_at=cache.built_at)


@router.get("/curated")
def curated_spots(repo: SpotRepository = Depends(get_spot_repo)):
    """Hand-maintained spots from curated.json; edits show up without a restart."""
    return {"spots": repo.load_curated()}


# --- Admin ---
@router.get("/admin/spots", response_model=AdminSpotsResponse)
def admin_spots(repo: SpotRepository = Depends(get_spot_repo)):
    cache = repo.load_cache()
    if cache is None:
        return AdminSpotsResponse(spots=[], built_at=None, total_spots=0)
    return AdminSpotsResponse(spots=cache.spots, built_at=cache.built_at, total_spots=cache.total_spots)


@router.post("/admin/toggle", response_model=ToggleResponse)
def admin_toggle(request: Optional[ToggleRequest] = None, repo: SpotRepository = Depends(get_spot_repo)):
    index = request.index if request else None
    # bool is an int subclass; reject it along with floats and strings
    if not isinstance(index, int) or isinstance(index, bool):
        raise InputValidationError("index is required")

    spot = repo.toggle_hidden(index)
    return ToggleResponse(index=index, hidden=spot.hidden, name=spot.name)
