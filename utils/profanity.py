from __future__ import annotations

from typing import Iterable

DEFAULT_PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_profanity(text: str, words: Iterable[str] = DEFAULT_PROFANE_WORDS) -> str:
    """Replace profane words with ``****``.

    Words are split on single spaces and matched case-insensitively; a word
    with punctuation attached ("fornax!") is left alone.
    """
    banned = {w.lower() for w in words}
    parts = text.split(" ")
    return " ".join(MASK if p.lower() in banned else p for p in parts)
