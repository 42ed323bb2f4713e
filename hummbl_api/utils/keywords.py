# =============================================
# File: hummbl_api/utils/keywords.py
# Purpose: Keyword extraction (tokenize, drop stopwords/short tokens, optional stemming)
# =============================================
from __future__ import annotations
import re
from typing import List, Optional

from .stemmer import stem
from .vocabulary import STOPWORDS

_NON_WORD_RE = re.compile(r"[^a-z0-9\s-]")
_MIN_TOKEN_LEN = 3


def normalize_text(text: str) -> str:
    """Lowercase and blank out everything outside [a-z0-9 whitespace -]; what tokenizing splits on."""
    return _NON_WORD_RE.sub(" ", (text or "").lower())


def extract_keywords(
    text: str,
    apply_stemming: bool = True,
    max_tokens: Optional[int] = None,
) -> List[str]:
    """
    Turn free text into an ordered keyword list.

    Lowercases, replaces anything outside [a-z0-9 whitespace -] with a
    space, splits on whitespace, then drops tokens shorter than three
    characters and stopwords. Duplicates are kept.

    Args:
        text: Any string (empty is fine).
        apply_stemming: Map surviving tokens through the stemmer.
        max_tokens: Keep only the first N surviving tokens.

    Returns:
        Keywords in input order.
    """
    if not text:
        return []
    words = normalize_text(text).split()
    words = [w for w in words if len(w) >= _MIN_TOKEN_LEN and w not in STOPWORDS]
    if max_tokens is not None:
        words = words[: max(0, max_tokens)]
    if apply_stemming:
        return [stem(w) for w in words]
    return words
