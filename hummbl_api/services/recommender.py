# =============================================
# File: hummbl_api/services/recommender.py
# Purpose: Rank catalog models for a free-text problem (scoring, stable top-k, fallback)
# =============================================

from __future__ import annotations
from typing import Any, List, Sequence, Tuple

from loguru import logger

from hummbl_api.utils.keywords import extract_keywords
from hummbl_api.utils.patterns import detect_patterns, matched_pattern_names
from hummbl_api.utils.recommend_core import MentalModel, RecommendationResult
from hummbl_api.utils.scoring import score_breakdown
from hummbl_api.utils.synonyms import expand_with_synonyms

DEFAULT_LIMIT = 5
MAX_LIMIT = 20
# Bound on query keywords; keeps the keyword x model-keyword x catalog loop finite on huge inputs.
MAX_QUERY_KEYWORDS = 256
KEYWORDS_USED_SAMPLE = 10


def clamp_limit(limit: Any, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """
    Coerce a caller-supplied limit into [1, maximum].

    Missing, non-numeric or non-positive values become `default`;
    anything above `maximum` becomes `maximum`.
    """
    if isinstance(limit, bool):
        return default
    try:
        n = int(limit)
    except (TypeError, ValueError, OverflowError):
        return default
    if n <= 0:
        return default
    return min(n, maximum)


def _fallback(models: Sequence[MentalModel], limit: int) -> RecommendationResult:
    picks = [m for m in models if m.priority == 1][:limit]
    return RecommendationResult(models=picks, matched_patterns=[], keywords_used=[], fallback=True)


def recommend_models(
    problem: str,
    models: Sequence[MentalModel],
    limit: Any = DEFAULT_LIMIT,
) -> RecommendationResult:
    """
    Recommend up to `limit` models for a problem description.

    Pipeline: raw keywords -> pattern boosts; stemmed keywords -> synonym
    expansion -> per-model score. Models are sorted by score (stable, so
    ties keep catalog order) and truncated. When nothing in the catalog
    matches the query, returns the priority-1 models instead.

    Pure function of (problem, models, limit) and the static vocabulary.
    """
    k = clamp_limit(limit)
    text = problem if isinstance(problem, str) else ""

    raw_keywords = extract_keywords(text, apply_stemming=False, max_tokens=MAX_QUERY_KEYWORDS)
    stemmed_keywords = extract_keywords(text, apply_stemming=True, max_tokens=MAX_QUERY_KEYWORDS)
    expanded = expand_with_synonyms(stemmed_keywords)
    boosts = detect_patterns(raw_keywords)

    scored: List[Tuple[MentalModel, float]] = []
    any_match = False
    for model in models:
        matched, final = score_breakdown(model, expanded, boosts)
        if matched > 0:
            any_match = True
        scored.append((model, final))

    ranked = [pair for pair in scored if pair[1] > 0]
    ranked.sort(key=lambda pair: pair[1], reverse=True)  # list.sort is stable
    picks = [m for m, _ in ranked[:k]]

    if not any_match or not picks:
        logger.info(f"[recommend] fallback keywords={len(stemmed_keywords)} limit={k}")
        return _fallback(models, k)

    result = RecommendationResult(
        models=picks,
        matched_patterns=matched_pattern_names(boosts),
        keywords_used=expanded[:KEYWORDS_USED_SAMPLE],
    )
    logger.info(
        f"[recommend] keywords={len(expanded)} patterns={result.matched_patterns} "
        f"picks={[m.code for m in picks]}"
    )
    return result
