import httpx
import logging
from typing import Optional

from gozleme_finder.core.config import Settings
from gozleme_finder.core.errors import ConfigurationError, InputValidationError, UpstreamError
from gozleme_finder.core.logger import logs
from gozleme_finder.models.places_model import GeocodeResponse, ReverseGeocodeResponse

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


def _find_component(components: list[dict], *types: str) -> Optional[dict]:
    for component in components:
        if any(t in component.get("types", []) for t in types):
            return component
    return None


def reduce_label(data: dict) -> Optional[str]:
    """
    Pick a human-readable label for a reverse-geocoded coordinate.
    Prefers the most local name: postcode, then neighbourhood, then locality,
    then the full formatted address. None when the lookup found nothing.
    """
    if data.get("status") != "OK" or not data.get("results"):
        return None

    result = data["results"][0]
    components = result.get("address_components") or []

    postal = _find_component(components, "postal_code")
    neighbourhood = _find_component(components, "neighborhood", "sublocality_level_1")
    locality = _find_component(components, "locality")

    return (
        (postal and postal.get("short_name"))
        or (neighbourhood and neighbourhood.get("long_name"))
        or (locality and locality.get("long_name"))
        or result.get("formatted_address")
    )


class GeocodingService:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.maps_key
        self.timeout = settings.HTTP_TIMEOUT
        self.transport = transport

    def _require_key(self):
        if not self.api_key:
            raise ConfigurationError("GOOGLE_MAPS_KEY not set in .env")

    async def _lookup(self, params: dict, label: str) -> dict:
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                resp = await client.get(
                    GEOCODE_URL,
                    params={**params, "key": self.api_key},
                    timeout=self.timeout
                )
                data = resp.json()
            except (httpx.HTTPError, ValueError) as e:
                logs.log(logging.ERROR, f"{label} proxy error: {str(e)}")
                raise UpstreamError(f"{label} request failed: {str(e)}")

        return data if isinstance(data, dict) else {}

    async def geocode(self, address: Optional[str]) -> GeocodeResponse:
        self._require_key()
        if not address:
            raise InputValidationError("address is required")

        data = await self._lookup({"address": address}, "Geocode")

        if data.get("status") != "OK" or not data.get("results"):
            logs.log(logging.WARNING, f'Geocode: no result for "{address}" (status: {data.get("status")})')
            return GeocodeResponse(lat=None, lng=None)

        location = data["results"][0]["geometry"]["location"]
        return GeocodeResponse(lat=location["lat"], lng=location["lng"])

    async def reverse_geocode(self, lat: Optional[float], lng: Optional[float]) -> ReverseGeocodeResponse:
        self._require_key()
        if lat is None or lng is None:
            raise InputValidationError("lat and lng are required")

        data = await self._lookup({"latlng": f"{lat},{lng}"}, "Reverse geocode")
        return ReverseGeocodeResponse(label=reduce_label(data))
