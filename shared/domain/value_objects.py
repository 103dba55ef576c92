"""
Common Value Objects

Value objects passed between the listing service and its adapters:
- Coordinates: a longitude/latitude pair produced by geocoding
- StoredImage: a durable reference to an uploaded photo
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject:
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """


@dataclass(frozen=True)
class Coordinates(ValueObject):
    """
    Geographic point in WGS84 degrees.

    Stored and rendered in GeoJSON order: longitude first.
    """
    longitude: float
    latitude: float

    def __post_init__(self):
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")

    def as_geometry(self) -> dict:
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


@dataclass(frozen=True)
class StoredImage(ValueObject):
    """Public URL plus the storage key needed to delete the object later."""
    url: str
    key: str = ""

    @property
    def is_default(self) -> bool:
        return not self.key
