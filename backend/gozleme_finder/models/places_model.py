from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Optional

# East London, where the finder is centred by default
DEFAULT_LATITUDE = 51.5200
DEFAULT_LONGITUDE = -0.0700


class PlacesRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text_query: Optional[str] = None
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    radius: float = 15000  # metres
    max_results: Any = 20


class ReviewSearchRequest(BaseModel):
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    # Tighter radius: searchNearby returns every restaurant, so keep it focused
    radius: float = 3000


class GeocodeRequest(BaseModel):
    address: Optional[str] = None


class ReverseGeocodeRequest(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class GeocodeResponse(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class ReverseGeocodeResponse(BaseModel):
    label: Optional[str] = None


class ToggleRequest(BaseModel):
    # Checked by hand so a missing or non-integer index reads "index is required"
    index: Any = None
