from __future__ import annotations

import re
from enum import Enum

MAPS_URL_PREFIX = "https://maps.app.goo.gl/"

_LEADING_MARKERS_RE = re.compile(r"^[\s\-*]*")
_CHECKBOX_RE = re.compile(r"^\[[x ]\]\s*")


class LineKind(str, Enum):
    noise = "noise"
    category = "category"
    item = "item"


def classify_line(line: str) -> LineKind:
    """Classify one line of the wishlist document."""
    stripped = line.strip()
    if not stripped:
        return LineKind.noise
    if MAPS_URL_PREFIX in stripped:
        return LineKind.item
    return LineKind.category


def clean_category(line: str) -> str:
    """
    Strip list markers and a checkbox from a category line.

    ``"- [ ] Brunch"`` becomes ``"Brunch"``. Returns an empty string for
    decorative lines such as ``"- [ ]"``.
    """
    name = _LEADING_MARKERS_RE.sub("", line.strip())
    name = _CHECKBOX_RE.sub("", name)
    return name.strip()
