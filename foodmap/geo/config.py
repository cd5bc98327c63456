from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GeocodeConfig:
    api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    geocode_endpoint: str = "https://maps.googleapis.com/maps/api/geocode/json"
    region_suffix: str = ", Dublin, Ireland"
    timeout: float = 10.0
    request_delay: float = 0.2  # seconds between lookups in a batch


DEFAULT_GEOCODE_CONFIG = GeocodeConfig()
