from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Iterable

from ..parsing.models import Coordinates, Restaurant

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS restaurants (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    category TEXT,
    is_completed INTEGER NOT NULL DEFAULT 0,
    maps_url TEXT NOT NULL,
    instagram_url TEXT,
    latitude REAL,
    longitude REAL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_restaurants_category ON restaurants(category);
CREATE INDEX IF NOT EXISTS idx_restaurants_completed ON restaurants(is_completed);
"""

# Coordinates already resolved for a restaurant survive a re-import of the
# markdown, which never carries coordinates itself.
_UPSERT = """
INSERT INTO restaurants (
    id, name, description, category, is_completed,
    maps_url, instagram_url, latitude, longitude, updated_at
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
ON CONFLICT(id) DO UPDATE SET
    name = excluded.name,
    description = excluded.description,
    category = excluded.category,
    is_completed = excluded.is_completed,
    maps_url = excluded.maps_url,
    instagram_url = excluded.instagram_url,
    latitude = COALESCE(excluded.latitude, restaurants.latitude),
    longitude = COALESCE(excluded.longitude, restaurants.longitude),
    updated_at = CURRENT_TIMESTAMP
"""


def _to_params(restaurant: Restaurant) -> tuple[Any, ...]:
    coords = restaurant.coordinates
    return (
        restaurant.id,
        restaurant.name,
        restaurant.description,
        restaurant.category,
        int(restaurant.is_completed),
        restaurant.maps_url,
        restaurant.instagram_url,
        coords.lat if coords else None,
        coords.lng if coords else None,
    )


def _from_row(row: sqlite3.Row) -> Restaurant:
    coords = None
    if row["latitude"] is not None and row["longitude"] is not None:
        coords = Coordinates(lat=row["latitude"], lng=row["longitude"])
    return Restaurant(
        id=row["id"],
        name=row["name"],
        description=row["description"] or "",
        category=row["category"],
        is_completed=bool(row["is_completed"]),
        maps_url=row["maps_url"],
        instagram_url=row["instagram_url"],
        coordinates=coords,
    )


class RestaurantRepository:
    """
    SQLite-backed store of restaurants keyed by their Google Maps link.

    Construct one per process and pass it to whatever needs it; call
    :meth:`close` (or use it as a context manager) at shutdown. The
    connection is shared between threads and every statement runs under a
    lock, so there is a single writer at any time.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        path = str(db_path)
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.executescript(_SCHEMA)
        logger.info("Opened restaurant store at %s", path)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> RestaurantRepository:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[Restaurant]:
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [_from_row(row) for row in rows]

    def _execute(self, sql: str, params: tuple[Any, ...]) -> int:
        with self._lock, self._conn:
            return self._conn.execute(sql, params).rowcount

    # ── Writes ──────────────────────────────────────────────────────────

    def upsert(self, restaurant: Restaurant) -> None:
        self._execute(_UPSERT, _to_params(restaurant))

    def upsert_many(self, restaurants: Iterable[Restaurant]) -> int:
        """Insert or update all restaurants in one transaction."""
        params = [_to_params(r) for r in restaurants]
        with self._lock, self._conn:
            self._conn.executemany(_UPSERT, params)
        return len(params)

    def update_status(self, restaurant_id: str, is_completed: bool) -> bool:
        changed = self._execute(
            "UPDATE restaurants SET is_completed = ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ?",
            (int(is_completed), restaurant_id),
        )
        return changed > 0

    def update_coordinates(self, restaurant_id: str, lat: float, lng: float) -> bool:
        changed = self._execute(
            "UPDATE restaurants SET latitude = ?, longitude = ?, "
            "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (lat, lng, restaurant_id),
        )
        return changed > 0

    # ── Reads ───────────────────────────────────────────────────────────

    def get(self, restaurant_id: str) -> Restaurant | None:
        found = self._query("SELECT * FROM restaurants WHERE id = ?", (restaurant_id,))
        return found[0] if found else None

    def get_all(self) -> list[Restaurant]:
        return self._query("SELECT * FROM restaurants ORDER BY category, name")

    def get_by_category(self, category: str) -> list[Restaurant]:
        return self._query(
            "SELECT * FROM restaurants WHERE category = ? ORDER BY name", (category,)
        )

    def get_by_status(self, is_completed: bool) -> list[Restaurant]:
        return self._query(
            "SELECT * FROM restaurants WHERE is_completed = ? ORDER BY category, name",
            (int(is_completed),),
        )

    def search(self, text: str) -> list[Restaurant]:
        """Case-insensitive substring match on name or description."""
        pattern = f"%{text}%"
        return self._query(
            "SELECT * FROM restaurants WHERE name LIKE ? OR description LIKE ? ORDER BY name",
            (pattern, pattern),
        )

    def list_categories(self) -> list[str]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT DISTINCT category FROM restaurants "
                "WHERE category IS NOT NULL ORDER BY category"
            ).fetchall()
        return [row["category"] for row in rows]

    def get_stats(self) -> dict[str, int]:
        with self._lock:
            row = self._conn.execute(
                "SELECT COUNT(*) AS total, "
                "COALESCE(SUM(is_completed), 0) AS completed, "
                "COUNT(DISTINCT category) AS categories "
                "FROM restaurants"
            ).fetchone()
        return {
            "total": row["total"],
            "completed": row["completed"],
            "categories": row["categories"],
        }
