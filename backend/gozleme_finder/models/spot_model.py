from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional, Union


class Spot(BaseModel):
    """A single gozleme spot as stored in the cache file.

    Reading is lenient: the cache may be hand-edited or written by older
    builders, so off-shape values are coerced rather than rejected.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Keep hand-added keys intact when the file is rewritten
        extra="allow"
    )

    name: str = ""
    area: str = ""
    address: str = ""
    description: str = ""
    tags: List[str] = []
    lat: Optional[float] = None
    lng: Optional[float] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    is_open: Optional[bool] = None
    price_level: Optional[Union[str, int]] = None
    maps_url: Optional[str] = None
    source: str = "ai"
    cached_at: Optional[str] = None
    hidden: bool = False

    @field_validator("name", "area", "address", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        if value is None or isinstance(value, (dict, list)):
            return ""
        return str(value)

    @field_validator("source", mode="before")
    @classmethod
    def _source(cls, value: Any) -> str:
        return str(value) if isinstance(value, (str, int, float)) else "ai"

    @field_validator("maps_url", "cached_at", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> List[str]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(t) for t in value if t is not None and not isinstance(t, (dict, list))]
        return []

    @field_validator("lat", "lng", "rating", mode="before")
    @classmethod
    def _number(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @field_validator("review_count", mode="before")
    @classmethod
    def _count(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("is_open", mode="before")
    @classmethod
    def _open(cls, value: Any) -> Optional[bool]:
        return value if isinstance(value, bool) else None

    @field_validator("price_level", mode="before")
    @classmethod
    def _price_level(cls, value: Any) -> Optional[Union[str, int]]:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        return value

    @field_validator("hidden", mode="before")
    @classmethod
    def _hidden(cls, value: Any) -> bool:
        return value is True


class CacheFile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    built_at: Optional[str] = None
    total_spots: int = 0
    spots: List[Spot] = []

    @field_validator("built_at", mode="before")
    @classmethod
    def _built_at(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("total_spots", mode="before")
    @classmethod
    def _total(cls, value: Any) -> int:
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    @field_validator("spots", mode="before")
    @classmethod
    def _spots(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [s for s in value if isinstance(s, (dict, Spot))]


# --- API Response Models ---
class CachedSpotsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    spots: List[Spot]
    built_at: Optional[str] = None


class AdminSpotsResponse(CachedSpotsResponse):
    total_spots: int = 0


class ToggleResponse(BaseModel):
    index: int
    hidden: bool
    name: str
