from __future__ import annotations

from pydantic import BaseModel


class Coordinates(BaseModel):
    lat: float
    lng: float


class Restaurant(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str | None = None
    is_completed: bool = False
    maps_url: str
    instagram_url: str | None = None
    coordinates: Coordinates | None = None
