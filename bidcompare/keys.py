"""Reconciliation keys used to align line items across bids."""

from __future__ import annotations

import unicodedata
from typing import Any, Tuple

from .normalize import normalize_description

# ASCII unit separator; never produced by normalized display text.
KEY_DELIMITER = "\x1f"


def build_key(category: Any, description: Any) -> str:
    """Return the matching key for a (category, description) pair.

    Two line items reconcile only when their keys are equal; there is no
    similarity scoring, so differently worded items stay on separate rows.
    """

    category_text = normalize_description(category).lower()
    description_text = normalize_description(description).lower()
    return f"{category_text}{KEY_DELIMITER}{description_text}"


def collation_key(text: str) -> Tuple[str, str]:
    """Sort key approximating a locale-aware comparison of display text."""

    value = text or ""
    decomposed = unicodedata.normalize("NFKD", value)
    without_diacritics = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return without_diacritics.casefold(), value


__all__ = ["KEY_DELIMITER", "build_key", "collation_key"]
