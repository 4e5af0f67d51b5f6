from fastapi import APIRouter, Depends

from gozleme_finder.core.config import Settings
from gozleme_finder.models.places_model import (
    GeocodeRequest,
    GeocodeResponse,
    ReverseGeocodeRequest,
    ReverseGeocodeResponse,
)
from gozleme_finder.routes.deps import get_app_settings, get_transport
from gozleme_finder.services.Geocoding_service import GeocodingService

router = APIRouter(prefix="/api")


def get_geocoding_service(
    settings: Settings = Depends(get_app_settings),
    transport=Depends(get_transport),
) -> GeocodingService:
    return GeocodingService(settings, transport=transport)


@router.post("/geocode", response_model=GeocodeResponse)
async def geocode_endpoint(
    request: GeocodeRequest,
    service: GeocodingService = Depends(get_geocoding_service)
):
    return await service.geocode(request.address)


@router.post("/geocode-reverse", response_model=ReverseGeocodeResponse)
async def reverse_geocode_endpoint(
    request: ReverseGeocodeRequest,
    service: GeocodingService = Depends(get_geocoding_service)
):
    return await service.reverse_geocode(request.lat, request.lng)
