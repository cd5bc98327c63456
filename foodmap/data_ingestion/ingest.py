from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..parsing.models import Restaurant
from ..parsing.parser import parse_markdown
from ..restaurants.repository import RestaurantRepository
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "description",
    "category",
    "is_completed",
    "maps_url",
    "instagram_url",
    "latitude",
    "longitude",
]


def load_restaurants(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> list[Restaurant]:
    """Read and parse the wishlist markdown. Raises FileNotFoundError if missing."""
    content = config.markdown_path.read_text(encoding="utf-8")
    return parse_markdown(content)


def write_snapshot(restaurants: list[Restaurant], output_path: Path) -> Path:
    """Persist restaurants as a CSV with the canonical columns."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = []
    for r in restaurants:
        rows.append({
            "id": r.id,
            "name": r.name,
            "description": r.description,
            "category": r.category,
            "is_completed": r.is_completed,
            "maps_url": r.maps_url,
            "instagram_url": r.instagram_url,
            "latitude": r.coordinates.lat if r.coordinates else None,
            "longitude": r.coordinates.lng if r.coordinates else None,
        })

    df = pd.DataFrame(rows, columns=CANONICAL_COLUMNS)
    df.to_csv(output_path, index=False)
    return output_path


def run_ingestion(
    repository: RestaurantRepository,
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> list[Restaurant]:
    """
    Execute the wishlist ingestion pipeline.

    Steps:
    - Parse the markdown file into Restaurant records.
    - Upsert them into the store by link id.
    - Write a CSV snapshot of the whole store for downstream use.
    """
    restaurants = load_restaurants(config)
    if restaurants:
        repository.upsert_many(restaurants)
    write_snapshot(repository.get_all(), config.processed_path)
    logger.info("Ingested %d restaurants from %s", len(restaurants), config.markdown_path)
    return restaurants


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    with RestaurantRepository(DEFAULT_INGESTION_CONFIG.database_path) as repo:
        ingested = run_ingestion(repo)
    print(f"Ingestion complete. {len(ingested)} restaurants saved to: {DEFAULT_INGESTION_CONFIG.database_path}")
