# =============================================
# File: hummbl_api/utils/stemmer.py
# Purpose: Crude suffix-stripping stemmer used for keyword matching
# =============================================
from __future__ import annotations
from typing import Tuple

# Order matters: the first suffix that fits wins.
SUFFIXES: Tuple[str, ...] = (
    "ing",
    "ed",
    "ly",
    "tion",
    "sion",
    "ness",
    "ment",
    "able",
    "ible",
    "ful",
    "less",
    "ous",
    "ive",
    "al",
    "er",
    "est",
    "s",
)


def stem(word: str) -> str:
    """
    Strip at most one suffix from a word.

    Suffixes are tried in SUFFIXES order; a suffix is stripped only when
    the word is longer than the suffix plus two characters, so the stem
    never drops below three characters.

    >>> stem("breaking")
    'break'
    >>> stem("hopelessness")
    'hopeless'
    """
    w = (word or "").lower()
    for suffix in SUFFIXES:
        if len(w) > len(suffix) + 2 and w.endswith(suffix):
            return w[: -len(suffix)]
    return w
