from pathlib import Path

import pandas as pd
import pytest

from foodmap.data_ingestion.config import IngestionConfig
from foodmap.data_ingestion.ingest import CANONICAL_COLUMNS, load_restaurants, run_ingestion
from foodmap.restaurants.repository import RestaurantRepository

WISHLIST = """\
Dinner
- [x] Great Place - Lovely food (https://www.instagram.com/greatplace) https://maps.app.goo.gl/AbC123
- [ ] Noodle Bar - Ramen https://maps.app.goo.gl/Nood1e
Brunch
- [ ] Brother Hubbard - Eggs (https://maps.app.goo.gl/BroHub1)
"""


def _config(tmp_path: Path) -> IngestionConfig:
    markdown = tmp_path / "wishlist.md"
    markdown.write_text(WISHLIST, encoding="utf-8")
    return IngestionConfig(
        markdown_path=markdown,
        database_path=tmp_path / "restaurants.db",
        processed_data_dir=tmp_path / "processed",
    )


def test_run_ingestion_populates_store_and_snapshot(tmp_path: Path):
    """
    End-to-end test for ingestion.

    Uses a temporary directory so we don't pollute real data directories.
    """
    cfg = _config(tmp_path)

    with RestaurantRepository(cfg.database_path) as repo:
        restaurants = run_ingestion(repo, config=cfg)
        assert len(restaurants) == 3
        assert repo.get_stats() == {"total": 3, "completed": 1, "categories": 2}

    assert cfg.processed_path.is_file(), "Processed CSV should be created"
    df = pd.read_csv(cfg.processed_path)
    assert len(df) == 3
    assert list(df.columns) == CANONICAL_COLUMNS


def test_run_ingestion_twice_does_not_duplicate(tmp_path: Path):
    cfg = _config(tmp_path)
    with RestaurantRepository(":memory:") as repo:
        run_ingestion(repo, config=cfg)
        run_ingestion(repo, config=cfg)
        assert repo.get_stats()["total"] == 3


def test_load_restaurants_missing_file(tmp_path: Path):
    cfg = IngestionConfig(markdown_path=tmp_path / "absent.md")
    with pytest.raises(FileNotFoundError):
        load_restaurants(cfg)
