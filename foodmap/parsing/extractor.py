from __future__ import annotations

import logging
import re
from functools import partial
from typing import Callable

from .models import Restaurant

logger = logging.getLogger(__name__)

MAPS_URL_RE = re.compile(r"https://maps\.app\.goo\.gl/[a-zA-Z0-9]+")
INSTAGRAM_URL_RE = re.compile(r"https://www\.instagram\.com/[^)\]\s]+")

CHECKED_MARKER = "[x]"
SEGMENT_SEPARATOR = " - "

_LIST_PREFIX_RE = re.compile(r"^\s*(?:[-*]\s+)?(?:\[[x ]\]\s*)?")
# one level of nested brackets, e.g. [[see [this] note]]
_DOUBLE_BRACKET_RE = re.compile(r"\[\[(?:[^\[\]]|\[[^\[\]]*\])*\]\]")
_SINGLE_BRACKET_RE = re.compile(r"\[([^\]]*)\]")
_LEADING_DASH_RE = re.compile(r"^\s*-\s*")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Residual text cleanup
# ---------------------------------------------------------------------------


def _strip_list_prefix(text: str) -> str:
    return _LIST_PREFIX_RE.sub("", text, count=1)


def _drop_double_brackets(text: str) -> str:
    # [[note]] is a cross-reference marker with no display value
    return _DOUBLE_BRACKET_RE.sub("", text)


def _unwrap_single_brackets(text: str) -> str:
    return _SINGLE_BRACKET_RE.sub(r"\1", text)


def _drop_link(text: str, link: str | None) -> str:
    """Remove the exact link text plus one layer of wrapping parentheses."""
    if not link:
        return text
    pattern = re.compile(r"\(?" + re.escape(link) + r"(?![a-zA-Z0-9])\)?")
    return pattern.sub("", text)


def _strip_leading_dash(text: str) -> str:
    return _LEADING_DASH_RE.sub("", text, count=1)


def _squash_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _residual_text(line: str, maps_url: str, instagram_url: str | None) -> str:
    steps: list[Callable[[str], str]] = [
        _strip_list_prefix,
        _drop_double_brackets,
        _unwrap_single_brackets,
        partial(_drop_link, link=maps_url),
        partial(_drop_link, link=instagram_url),
        _strip_leading_dash,
        _squash_whitespace,
    ]
    residual = line
    for step in steps:
        residual = step(residual)
    return residual


def _split_name_description(text: str) -> tuple[str, str]:
    parts = [part.strip() for part in text.split(SEGMENT_SEPARATOR)]
    parts = [part for part in parts if part]

    name = parts[0] if parts else ""
    description = parts[1] if len(parts) > 1 else ""
    extra = SEGMENT_SEPARATOR.join(parts[2:])
    if extra:
        description = f"{description}{SEGMENT_SEPARATOR}{extra}" if description else extra
    return name, description


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_restaurant(line: str, category: str | None = None) -> Restaurant | None:
    """
    Build a Restaurant from a single item line.

    The Google Maps short link is the record's identity; lines without one
    are logged and skipped (``None``) rather than treated as errors.
    """
    maps_match = MAPS_URL_RE.search(line)
    if not maps_match:
        logger.warning("Skipping item line without a Google Maps link: %r", line)
        return None

    maps_url = maps_match.group(0)
    instagram_match = INSTAGRAM_URL_RE.search(line)
    instagram_url = instagram_match.group(0) if instagram_match else None

    name, description = _split_name_description(
        _residual_text(line, maps_url, instagram_url)
    )

    return Restaurant(
        id=maps_url.strip("()"),
        name=name,
        description=description,
        category=category,
        is_completed=CHECKED_MARKER in line,
        maps_url=maps_url,
        instagram_url=instagram_url,
    )
