from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Literal

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request

from .data_ingestion.config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from .data_ingestion.ingest import run_ingestion
from .geo.config import DEFAULT_GEOCODE_CONFIG, GeocodeConfig
from .geo.coordinates import apply_configured_shift
from .geo.geocode import geocode_missing, resolve_coordinates
from .restaurants.models import (
    ActionResponse,
    CategoryListResponse,
    GeocodeResponse,
    RestaurantAction,
    RestaurantListResponse,
    Stats,
    StatsResponse,
)
from .restaurants.repository import RestaurantRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_repository(request: Request) -> RestaurantRepository:
    return request.app.state.repository


def get_ingestion_config(request: Request) -> IngestionConfig:
    return request.app.state.ingestion_config


def get_geocode_config(request: Request) -> GeocodeConfig:
    return request.app.state.geocode_config


def _auto_initialize(repository: RestaurantRepository, config: IngestionConfig) -> None:
    if repository.get_stats()["total"] or not config.markdown_path.is_file():
        return
    logger.info("Store is empty, initialising from %s", config.markdown_path)
    run_ingestion(repository, config)


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/restaurants", response_model=RestaurantListResponse)
def list_restaurants(
    category: str | None = None,
    status: Literal["completed", "pending"] | None = None,
    search: str | None = None,
    repository: RestaurantRepository = Depends(get_repository),
    config: IngestionConfig = Depends(get_ingestion_config),
) -> RestaurantListResponse:
    _auto_initialize(repository, config)

    # Only one filter applies: search, then category, then status
    if search:
        restaurants = repository.search(search)
    elif category:
        restaurants = repository.get_by_category(category)
    elif status:
        restaurants = repository.get_by_status(status == "completed")
    else:
        restaurants = repository.get_all()

    return RestaurantListResponse(data=restaurants, count=len(restaurants))


@router.post("/restaurants", response_model=ActionResponse)
def restaurant_action(
    body: RestaurantAction,
    repository: RestaurantRepository = Depends(get_repository),
    config: IngestionConfig = Depends(get_ingestion_config),
    geocode_config: GeocodeConfig = Depends(get_geocode_config),
) -> ActionResponse:
    if body.action == "refresh":
        try:
            restaurants = run_ingestion(repository, config)
        except FileNotFoundError:
            raise HTTPException(status_code=404, detail="Markdown file not found")
        return ActionResponse(
            message=f"Refreshed {len(restaurants)} restaurants from markdown",
            count=len(restaurants),
        )

    if body.action == "update-status":
        if not repository.update_status(body.id, body.is_completed):
            raise HTTPException(status_code=404, detail="Restaurant not found")
        return ActionResponse(message="Restaurant status updated")

    updated = geocode_missing(repository, geocode_config)
    return ActionResponse(message=f"Geocoded {updated} restaurants", count=updated)


@router.get("/categories", response_model=CategoryListResponse)
def categories(
    repository: RestaurantRepository = Depends(get_repository),
) -> CategoryListResponse:
    names = repository.list_categories()
    return CategoryListResponse(data=names, count=len(names))


@router.get("/stats", response_model=StatsResponse)
def stats(
    repository: RestaurantRepository = Depends(get_repository),
) -> StatsResponse:
    counts = repository.get_stats()
    total = counts["total"]
    completed = counts["completed"]
    return StatsResponse(
        data=Stats(
            total=total,
            completed=completed,
            pending=total - completed,
            categories=counts["categories"],
            completion_rate=round(completed / total * 100) if total else 0,
        )
    )


@router.get("/geocode", response_model=GeocodeResponse)
def geocode(
    url: str | None = None,
    geocode_config: GeocodeConfig = Depends(get_geocode_config),
) -> GeocodeResponse:
    if not url:
        raise HTTPException(status_code=400, detail="Missing URL parameter")
    coords = resolve_coordinates(url, geocode_config)
    return GeocodeResponse(coordinates=apply_configured_shift(coords))


def create_app(
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    geocode_config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
) -> FastAPI:
    """Build the API with one restaurant store opened for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        repository = RestaurantRepository(config.database_path)
        app.state.repository = repository
        try:
            yield
        finally:
            repository.close()

    app = FastAPI(title="Restaurant Wishlist Map API", version="1.0.0", lifespan=lifespan)
    app.state.ingestion_config = config
    app.state.geocode_config = geocode_config
    app.include_router(router)
    return app


app = create_app()
