from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ..parsing.models import Coordinates, Restaurant


class RestaurantAction(BaseModel):
    action: Literal["refresh", "update-status", "geocode"]
    id: str | None = Field(default=None, min_length=1)
    is_completed: bool | None = None

    @model_validator(mode="after")
    def _status_update_needs_target(self) -> RestaurantAction:
        if self.action == "update-status" and (self.id is None or self.is_completed is None):
            raise ValueError("update-status requires id and is_completed")
        return self


class ActionResponse(BaseModel):
    success: bool = True
    message: str
    count: int | None = None


class RestaurantListResponse(BaseModel):
    success: bool = True
    data: list[Restaurant]
    count: int


class CategoryListResponse(BaseModel):
    success: bool = True
    data: list[str]
    count: int


class Stats(BaseModel):
    total: int
    completed: int
    pending: int
    categories: int
    completion_rate: int = Field(..., ge=0, le=100, description="Completed share, in percent")


class StatsResponse(BaseModel):
    success: bool = True
    data: Stats


class GeocodeResponse(BaseModel):
    coordinates: Coordinates | None = None
