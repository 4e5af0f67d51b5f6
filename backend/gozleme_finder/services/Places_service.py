import httpx
import logging

from gozleme_finder.core.config import Settings
from gozleme_finder.core.errors import ConfigurationError, InputValidationError, UpstreamError, upstream_message
from gozleme_finder.core.logger import logs
from gozleme_finder.models.places_model import PlacesRequest, ReviewSearchRequest
from gozleme_finder.services.matching import filter_places_by_review

PLACES_BASE_URL = "https://places.googleapis.com/v1"

# Places API hard limit per request
MAX_RESULT_COUNT = 20

FIELD_MASK = [
    "places.displayName",
    "places.formattedAddress",
    "places.shortFormattedAddress",
    "places.rating",
    "places.userRatingCount",
    "places.currentOpeningHours",
    "places.priceLevel",
    "places.googleMapsUri",
    "places.location",
]

# searchNearby has no keyword filter, so cast a wide net over food venues
NEARBY_TYPES = ["restaurant", "cafe", "bakery", "meal_takeaway", "meal_delivery"]

# At London's latitude: 1 deg lat ~ 111 km, 1 deg lng ~ 69 km
KM_PER_DEG_LAT = 111
KM_PER_DEG_LNG = 69


def cap_result_count(requested) -> int:
    """Clamp a caller's result count to the API limit; junk or non-positive means the limit."""
    try:
        count = int(float(requested))
    except (TypeError, ValueError, OverflowError):
        return MAX_RESULT_COUNT
    if count <= 0:
        return MAX_RESULT_COUNT
    return min(count, MAX_RESULT_COUNT)


def bounding_rectangle(latitude: float, longitude: float, radius_m: float) -> dict:
    """Convert a centre and radius in metres into a lat/lng rectangle."""
    radius_km = radius_m / 1000
    lat_delta = radius_km / KM_PER_DEG_LAT
    lng_delta = radius_km / KM_PER_DEG_LNG
    return {
        "low": {"latitude": latitude - lat_delta, "longitude": longitude - lng_delta},
        "high": {"latitude": latitude + lat_delta, "longitude": longitude + lng_delta},
    }


class PlacesService:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.GOOGLE_PLACES_KEY
        self.timeout = settings.HTTP_TIMEOUT
        self.transport = transport

    def _require_key(self):
        if not self.api_key:
            raise ConfigurationError("GOOGLE_PLACES_KEY not set in .env")

    async def _post(self, endpoint: str, body: dict, fields: list[str], label: str) -> dict:
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": ",".join(fields),
        }

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{PLACES_BASE_URL}/places:{endpoint}",
                    json=body,
                    headers=headers,
                    timeout=self.timeout
                )
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logs.log(logging.ERROR, f"{label} proxy error: {str(e)}")
                raise UpstreamError(f"Proxy request failed: {str(e)}")

        if response.is_error:
            msg = upstream_message(data, response.reason_phrase)
            logs.log(logging.ERROR, f"{label} upstream returned {response.status_code}: {msg}")
            raise UpstreamError(f"{label} error: {msg}")

        return data

    async def text_search(self, request: PlacesRequest) -> dict:
        """Keyword search inside a rectangle around the caller's centre."""
        self._require_key()
        if not request.text_query:
            raise InputValidationError("textQuery is required")

        rectangle = bounding_rectangle(request.latitude, request.longitude, request.radius)
        box = [
            rectangle["low"]["latitude"], rectangle["low"]["longitude"],
            rectangle["high"]["latitude"], rectangle["high"]["longitude"],
        ]
        logs.log(
            logging.INFO,
            f"Places search: {request.text_query} | centre: {request.latitude} {request.longitude}"
            f" | radius: {request.radius / 1000}km | box: {', '.join(f'{n:.4f}' for n in box)}"
        )

        body = {
            "textQuery": request.text_query,
            "locationRestriction": {"rectangle": rectangle},
            "maxResultCount": cap_result_count(request.max_results),
        }
        return await self._post("searchText", body, FIELD_MASK, "Google Places")

    async def search_by_review(self, request: ReviewSearchRequest) -> dict:
        """
        Fetch every food venue in a circle and keep those whose reviews
        mention gozleme. Catches places that Google does not categorise as
        Turkish but whose customers talk about gozleme.
        """
        self._require_key()

        body = {
            "includedTypes": NEARBY_TYPES,
            "maxResultCount": MAX_RESULT_COUNT,
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": request.latitude, "longitude": request.longitude},
                    "radius": request.radius,
                }
            },
        }
        logs.log(logging.INFO, f"Nearby review search: centre: {request.latitude} {request.longitude} | radius: {request.radius}m")

        data = await self._post("searchNearby", body, FIELD_MASK + ["places.reviews"], "searchNearby")
        places = filter_places_by_review(data.get("places") or [])

        logs.log(logging.INFO, f"Nearby review search: {len(places)} of {len(data.get('places') or [])} places mention gozleme")
        return {"places": places}
