from __future__ import annotations

from pathlib import Path

import pytest

from foodmap.parsing.models import Coordinates, Restaurant
from foodmap.restaurants.repository import RestaurantRepository


def _restaurant(token: str, name: str, **kwargs) -> Restaurant:
    url = f"https://maps.app.goo.gl/{token}"
    return Restaurant(id=url, maps_url=url, name=name, **kwargs)


SAMPLE = [
    _restaurant("A1", "Great Place", description="Lovely food", category="Dinner",
                is_completed=True, instagram_url="https://www.instagram.com/greatplace"),
    _restaurant("B2", "Noodle Bar", description="Ramen", category="Dinner"),
    _restaurant("C3", "Brother Hubbard", description="Eggs", category="Brunch"),
    _restaurant("D4", "Mystery Spot"),
]


@pytest.fixture
def repo():
    with RestaurantRepository(":memory:") as r:
        r.upsert_many(SAMPLE)
        yield r


def test_get_all_round_trips_fields(repo):
    stored = {r.id: r for r in repo.get_all()}
    assert len(stored) == 4
    assert stored["https://maps.app.goo.gl/A1"] == SAMPLE[0]
    assert stored["https://maps.app.goo.gl/D4"].category is None


def test_upsert_collapses_same_id(repo):
    repo.upsert(_restaurant("A1", "Great Place (renamed)", category="Dinner"))
    assert repo.get_stats()["total"] == 4
    assert repo.get("https://maps.app.goo.gl/A1").name == "Great Place (renamed)"


def test_upsert_keeps_resolved_coordinates(repo):
    repo.update_coordinates("https://maps.app.goo.gl/B2", 53.34, -6.25)
    repo.upsert_many([_restaurant("B2", "Noodle Bar", description="Ramen", category="Dinner")])
    assert repo.get("https://maps.app.goo.gl/B2").coordinates == Coordinates(lat=53.34, lng=-6.25)


def test_upsert_stores_given_coordinates(repo):
    repo.upsert(_restaurant("E5", "Pinned", coordinates=Coordinates(lat=0.0, lng=0.0)))
    assert repo.get("https://maps.app.goo.gl/E5").coordinates == Coordinates(lat=0.0, lng=0.0)


def test_get_by_category(repo):
    names = [r.name for r in repo.get_by_category("Dinner")]
    assert names == ["Great Place", "Noodle Bar"]


def test_get_by_status(repo):
    assert [r.name for r in repo.get_by_status(True)] == ["Great Place"]
    assert len(repo.get_by_status(False)) == 3


def test_search_name_and_description(repo):
    assert [r.name for r in repo.search("ramen")] == ["Noodle Bar"]
    assert [r.name for r in repo.search("brother")] == ["Brother Hubbard"]
    assert repo.search("sushi") == []


def test_update_status(repo):
    assert repo.update_status("https://maps.app.goo.gl/B2", True) is True
    assert repo.get("https://maps.app.goo.gl/B2").is_completed is True
    assert repo.update_status("https://maps.app.goo.gl/nope", True) is False


def test_update_coordinates_unknown_id(repo):
    assert repo.update_coordinates("https://maps.app.goo.gl/nope", 1.0, 2.0) is False


def test_list_categories(repo):
    assert repo.list_categories() == ["Brunch", "Dinner"]


def test_stats(repo):
    assert repo.get_stats() == {"total": 4, "completed": 1, "categories": 2}


def test_empty_stats():
    with RestaurantRepository(":memory:") as r:
        assert r.get_stats() == {"total": 0, "completed": 0, "categories": 0}
        assert r.get("missing") is None


def test_file_database_persists(tmp_path: Path):
    db_path = tmp_path / "nested" / "restaurants.db"
    with RestaurantRepository(db_path) as r:
        r.upsert_many(SAMPLE)
    with RestaurantRepository(db_path) as r:
        assert r.get_stats()["total"] == 4
