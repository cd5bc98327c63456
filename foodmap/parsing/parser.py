from __future__ import annotations

import logging
from typing import Iterable

from .classifier import LineKind, classify_line, clean_category
from .extractor import extract_restaurant
from .models import Restaurant

logger = logging.getLogger(__name__)


def parse_markdown(content: str | Iterable[str]) -> list[Restaurant]:
    """
    Parse a wishlist document into Restaurant records in document order.

    Category lines set the category for every following item until the next
    category line; items before the first category have ``category=None``.
    """
    lines = content.split("\n") if isinstance(content, str) else content

    restaurants: list[Restaurant] = []
    current_category: str | None = None
    skipped = 0

    for raw_line in lines:
        line = raw_line.strip()
        kind = classify_line(line)

        if kind is LineKind.noise:
            continue

        if kind is LineKind.category:
            # Decorative lines like "- [ ]" keep the previous category
            category = clean_category(line)
            if category:
                current_category = category
            continue

        restaurant = extract_restaurant(line, current_category)
        if restaurant is None:
            skipped += 1
            continue
        restaurants.append(restaurant)

    logger.info("Parsed %d restaurants (%d item lines skipped)", len(restaurants), skipped)
    return restaurants
