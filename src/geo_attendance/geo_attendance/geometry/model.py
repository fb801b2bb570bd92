from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_in_range
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Coordinate:
    """A WGS-84 point in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", require_in_range(self.latitude, "Latitude", -90.0, 90.0))
        object.__setattr__(self, "longitude", require_in_range(self.longitude, "Longitude", -180.0, 180.0))

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinate":
        """Accept both {latitude, longitude} and the short {lat, lng} form."""
        if not isinstance(data, dict):
            raise ValidationError("Coordinate payload must be an object")
        lat = data.get("latitude", data.get("lat"))
        lng = data.get("longitude", data.get("lng"))
        return cls(latitude=lat, longitude=lng)

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}
