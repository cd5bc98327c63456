from __future__ import annotations

import logging
import re
import time
from typing import Callable
from urllib.parse import unquote_plus

import httpx

from ..parsing.models import Coordinates
from ..restaurants.repository import RestaurantRepository
from .config import DEFAULT_GEOCODE_CONFIG, GeocodeConfig
from .coordinates import apply_configured_shift

logger = logging.getLogger(__name__)

# Dublin city centre, used when a link cannot be resolved
DUBLIN_CENTER = Coordinates(lat=53.3498, lng=-6.2603)

_PLACE_ID_RE = re.compile(r"place/[^/]+/data=.*!1m(\d+)!1m(\d+)!1s([^!]+)")
_ALT_PLACE_ID_RE = re.compile(r"data=.*!1s([^!]+)!")
_AT_COORDS_RE = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")
_PLACE_NAME_RE = re.compile(r"/place/([^/]+)")


def _extract_place_id(url: str) -> str | None:
    match = _PLACE_ID_RE.search(url)
    if match:
        return match.group(3)
    match = _ALT_PLACE_ID_RE.search(url)
    if match:
        return match.group(1)
    return None


def _geocode(
    client: httpx.Client,
    config: GeocodeConfig,
    params: dict[str, str],
) -> Coordinates | None:
    response = client.get(config.geocode_endpoint, params={**params, "key": config.api_key})
    response.raise_for_status()
    data = response.json()
    if data.get("status") != "OK" or not data.get("results"):
        logger.info("Geocoding API returned %s for %s", data.get("status"), params)
        return None
    location = data["results"][0]["geometry"]["location"]
    return Coordinates(lat=location["lat"], lng=location["lng"])


def _resolve(client: httpx.Client, url: str, config: GeocodeConfig) -> Coordinates | None:
    # Short links redirect to the full Maps URL that carries place details
    response = client.head(url, follow_redirects=True)
    final_url = str(response.url) or url

    place_id = _extract_place_id(final_url)
    if config.api_key and place_id and place_id.startswith("0x"):
        coords = _geocode(client, config, {"place_id": place_id})
        if coords is not None:
            return coords

    match = _AT_COORDS_RE.search(final_url)
    if match:
        return Coordinates(lat=float(match.group(1)), lng=float(match.group(2)))

    match = _PLACE_NAME_RE.search(final_url)
    if config.api_key and match:
        place_name = unquote_plus(match.group(1))
        return _geocode(client, config, {"address": place_name + config.region_suffix})

    return None


def resolve_coordinates(
    url: str,
    config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
    client: httpx.Client | None = None,
) -> Coordinates | None:
    """
    Resolve a Google Maps short link to raw (unshifted) coordinates.

    Returns ``None`` when the link cannot be resolved or any request fails.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=config.timeout)
    try:
        return _resolve(client, url, config)
    except (httpx.HTTPError, ValueError, KeyError, IndexError):
        logger.warning("Geocoding failed for %s", url, exc_info=True)
        return None
    finally:
        if owns_client:
            client.close()


def geocode_missing(
    repository: RestaurantRepository,
    config: GeocodeConfig = DEFAULT_GEOCODE_CONFIG,
    client: httpx.Client | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Fill in coordinates for stored restaurants that have none.

    Links are resolved one at a time with ``config.request_delay`` between
    requests. Unresolved links fall back to the city centre. Every pair goes
    through the configured eastward shift before it is stored. Returns the
    number of restaurants updated.
    """
    pending = [r for r in repository.get_all() if r.coordinates is None]
    if not pending:
        return 0

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=config.timeout)

    updated = 0
    try:
        for index, restaurant in enumerate(pending):
            if index:
                sleep(config.request_delay)
            coords = resolve_coordinates(restaurant.maps_url, config, client)
            if coords is None:
                logger.info("Using fallback coordinates for %s", restaurant.maps_url)
                coords = DUBLIN_CENTER
            coords = apply_configured_shift(coords)
            if repository.update_coordinates(restaurant.id, coords.lat, coords.lng):
                updated += 1
    finally:
        if owns_client:
            client.close()

    logger.info("Geocoded %d of %d restaurants", updated, len(pending))
    return updated
