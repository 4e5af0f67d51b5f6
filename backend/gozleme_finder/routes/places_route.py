from typing import Optional

from fastapi import APIRouter, Depends

from gozleme_finder.core.config import Settings
from gozleme_finder.models.places_model import PlacesRequest, ReviewSearchRequest
from gozleme_finder.routes.deps import get_app_settings, get_transport
from gozleme_finder.services.Places_service import PlacesService

router = APIRouter(prefix="/api")


def get_places_service(
    settings: Settings = Depends(get_app_settings),
    transport=Depends(get_transport),
) -> PlacesService:
    return PlacesService(settings, transport=transport)


@router.post("/places")
async def places_endpoint(
    request: Optional[PlacesRequest] = None,
    service: PlacesService = Depends(get_places_service)
):
    # A missing body means every field takes its default
    return await service.text_search(request or PlacesRequest())


@router.post("/places-by-review")
async def places_by_review_endpoint(
    request: Optional[ReviewSearchRequest] = None,
    service: PlacesService = Depends(get_places_service)
):
    return await service.search_by_review(request or ReviewSearchRequest())
