from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the wishlist ingestion pipeline.
    """

    markdown_path: Path = Path(os.getenv("WISHLIST_MARKDOWN_PATH", "data/wishlist.md"))
    database_path: Path = Path(os.getenv("RESTAURANTS_DB_PATH", "database/restaurants.db"))
    processed_data_dir: Path = Path("data/processed")
    processed_filename: str = "restaurants.csv"

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
