"""Answer normalization for comparing typed translations."""
from __future__ import annotations

import unicodedata


def normalize_answer(text: str) -> str:
    """Fold *text* so case, diacritics and surrounding whitespace don't matter.

    "Mơ hồ" and "mo ho" both become "mo ho".  Vietnamese "đ" has no
    decomposition, so it is mapped to "d" explicitly.
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.replace("đ", "d").strip()
