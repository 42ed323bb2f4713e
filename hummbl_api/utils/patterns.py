# =============================================
# File: hummbl_api/utils/patterns.py
# Purpose: Detect problem patterns in raw keywords and build per-transformation boosts
# =============================================
from __future__ import annotations
from typing import Dict, Iterable, List, Sequence

from .recommend_core import TransformationType
from .stemmer import stem
from .vocabulary import PROBLEM_PATTERNS, ProblemPattern

BoostMap = Dict[TransformationType, float]

# Baseline weight for a transformation no pattern touched.
BASE_BOOST = 1.0
# Weights at or below this are not reported as matched patterns.
REPORT_THRESHOLD = 1.2
_PER_MATCH = 0.5


def _keyword_matches(pk: str, keywords: Sequence[str]) -> bool:
    spk = stem(pk)
    for k in keywords:
        if k == pk or k == spk or spk in k or k in spk or k in pk or pk in k:
            return True
    return False


def count_matches(pattern: ProblemPattern, keywords: Sequence[str]) -> int:
    """Number of distinct pattern keywords hit by at least one input keyword."""
    return sum(1 for pk in pattern.keywords if _keyword_matches(pk, keywords))


def detect_patterns(
    keywords: Iterable[str],
    patterns: Sequence[ProblemPattern] = PROBLEM_PATTERNS,
) -> BoostMap:
    """
    Build the boost map for a query from its raw (unstemmed) keywords.

    Each pattern with at least one hit adds min(hits * 0.5, pattern.boost)
    to every transformation it targets, on top of a baseline of 1. Several
    patterns pointing at the same transformation stack additively.
    """
    kws = list(keywords)
    boosts: BoostMap = {}
    if not kws:
        return boosts
    for pattern in patterns:
        hits = count_matches(pattern, kws)
        if hits == 0:
            continue
        bump = min(hits * _PER_MATCH, pattern.boost)
        for tag in pattern.transformations:
            boosts[tag] = boosts.get(tag, BASE_BOOST) + bump
    return boosts


def matched_pattern_names(boosts: BoostMap) -> List[str]:
    """Display names of transformations boosted past REPORT_THRESHOLD."""
    names: List[str] = []
    for tag, weight in boosts.items():
        if weight > REPORT_THRESHOLD and tag.display_name not in names:
            names.append(tag.display_name)
    return names
