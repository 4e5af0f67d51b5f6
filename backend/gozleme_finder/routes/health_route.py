from fastapi import APIRouter, Depends

from gozleme_finder.core.config import Settings
from gozleme_finder.core.errors import ConfigurationError
from gozleme_finder.routes.deps import get_app_settings

router = APIRouter()


# --- Health Check ---
@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    return {
        "status": "ok",
        "googlePlacesKeySet": bool(settings.GOOGLE_PLACES_KEY),
        "googleMapsKeySet": bool(settings.maps_key),
        "anthropicKeySet": bool(settings.ANTHROPIC_KEY),
    }


# The Maps JS key is handed over at runtime rather than baked into the HTML
@router.get("/api/maps-key")
async def maps_key(settings: Settings = Depends(get_app_settings)):
    if not settings.maps_key:
        raise ConfigurationError("GOOGLE_MAPS_KEY not configured in .env", status_code=404)
    return {"key": settings.maps_key}
