"""Domain helpers for slug normalization and validation."""
from __future__ import annotations

import re
import unicodedata

SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str | None) -> str:
    """Lowercase ASCII token with runs of other characters collapsed to one hyphen."""
    text = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def with_suffix(base: str, counter: int) -> str:
    return f"{base}-{counter}"


def is_valid_slug(value: str | None) -> bool:
    """Return True when slug is lowercase alphanumerics joined by single hyphens."""
    if not value:
        return False
    return bool(SLUG_PATTERN.fullmatch(value))
