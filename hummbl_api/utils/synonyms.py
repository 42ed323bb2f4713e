# =============================================
# File: hummbl_api/utils/synonyms.py
# Purpose: Grow a stemmed keyword set through the static synonym table
# =============================================
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Tuple

from .stemmer import stem
from .vocabulary import SYNONYMS


def expand_with_synonyms(
    keywords: Iterable[str],
    table: Mapping[str, Tuple[str, ...]] = SYNONYMS,
) -> List[str]:
    """
    Return the keywords plus every synonym family they belong to.

    A keyword pulls in a family when it equals the family's base term or
    one of its synonyms *as written in the table*. Keywords arrive stemmed
    while the table is not, so "improving" (stemmed to "improv") does not
    reach the "improve" family. Additions are stemmed.

    The result behaves like an insertion-ordered set: input keywords first
    (first occurrence wins), then discoveries in table order.
    """
    keywords = list(keywords)
    expanded: Dict[str, None] = dict.fromkeys(keywords)
    for kw in keywords:
        for base, syns in table.items():
            if kw == base or kw in syns:
                expanded.setdefault(stem(base))
                for s in syns:
                    expanded.setdefault(stem(s))
    return list(expanded)
