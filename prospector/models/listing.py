"""
Listing models - business records as returned by the place-search provider.
"""
import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class GpsCoordinates(BaseModel):
    """Latitude/longitude pair reported by Google Maps."""
    latitude: float
    longitude: float


class Listing(BaseModel):
    """
    A business listing from a Google Maps local search.

    Every field is optional: providers omit fields freely, and every
    consumer treats an absent value as falsy/zero.
    """
    place_id: Optional[str] = None
    place_id_search: Optional[str] = Field(
        default=None,
        description="Fallback identifier when place_id is absent"
    )
    data_id: Optional[str] = None

    title: str = ""
    type: Optional[str] = Field(default=None, description="Category free text")
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    reviews: int = 0
    thumbnail: Optional[str] = None
    photos: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    open_state: Optional[str] = None
    maps_url: Optional[str] = None
    gps_coordinates: Optional[GpsCoordinates] = None

    fetched_at: datetime = Field(default_factory=datetime.now)

    # Reference to original data
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @field_validator("title", mode="before")
    @classmethod
    def parse_title(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("rating", mode="before")
    @classmethod
    def parse_rating(cls, v: Any) -> Optional[float]:
        """Parse rating and clamp it to the 0-5 star range."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            v = v.replace(",", ".").strip()
        try:
            rating = float(v)
        except (TypeError, ValueError):
            return None
        return max(0.0, min(5.0, rating))

    @field_validator("reviews", mode="before")
    @classmethod
    def parse_reviews(cls, v: Any) -> int:
        """Parse review counts from various formats: 85, "1,234", "(85)"."""
        if v is None:
            return 0
        if isinstance(v, bool):
            return 0
        if isinstance(v, (int, float)):
            return max(0, int(v))
        if isinstance(v, str):
            digits = re.sub(r"[^\d]", "", v)
            return int(digits) if digits else 0
        return 0

    @field_validator("photos", mode="before")
    @classmethod
    def parse_photos(cls, v: Any) -> list[str]:
        if not v:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            photos = []
            for item in v:
                if isinstance(item, dict):
                    item = item.get("image") or item.get("thumbnail")
                if item:
                    photos.append(str(item))
            return photos
        return []

    @property
    def key(self) -> Optional[str]:
        """Identity used by every keyed store; None when untrackable."""
        return self.place_id or self.place_id_search or None

    @property
    def has_photo(self) -> bool:
        return bool(self.thumbnail or self.photos)

    @property
    def search_text(self) -> str:
        """Lower-cased title, category, description and address."""
        parts = [self.title, self.type, self.description, self.address]
        return " ".join(p for p in parts if p).lower()

    @classmethod
    def from_provider(cls, raw: dict[str, Any]) -> "Listing":
        """Build a listing from one SerpApi `local_results` entry."""
        gps = raw.get("gps_coordinates")
        if not isinstance(gps, dict) or "latitude" not in gps or "longitude" not in gps:
            gps = None

        description = raw.get("description")
        if description is not None and not isinstance(description, str):
            description = None

        return cls(
            place_id=raw.get("place_id") or None,
            place_id_search=raw.get("place_id_search") or None,
            data_id=raw.get("data_id") or None,
            title=raw.get("title"),
            type=raw.get("type") or None,
            address=raw.get("address") or None,
            phone=raw.get("phone") or None,
            website=raw.get("website") or None,
            rating=raw.get("rating"),
            reviews=raw.get("reviews"),
            thumbnail=raw.get("thumbnail") or None,
            photos=raw.get("photos") or raw.get("images"),
            description=description,
            open_state=raw.get("open_state") or None,
            maps_url=raw.get("maps_url") or raw.get("link") or None,
            gps_coordinates=gps,
            raw=raw,
        )
