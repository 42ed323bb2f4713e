# =============================================
# File: hummbl_api/utils/scoring.py
# Purpose: Score one mental model against expanded query keywords and pattern boosts
# =============================================
from __future__ import annotations
from functools import lru_cache
from typing import Mapping, Sequence, Tuple

from .keywords import extract_keywords
from .recommend_core import MentalModel, TransformationType

PAIR_MATCH = 1.0
RAW_TEXT_MATCH = 0.5
PRIORITY_STEP = 0.2


def model_text(model: MentalModel) -> str:
    return f"{model.name} {model.definition}".lower()


@lru_cache(maxsize=1024)
def _model_keywords(text: str) -> Tuple[str, ...]:
    # Keyed on the text itself, so the memo is only a speed-up.
    return tuple(extract_keywords(text, apply_stemming=True))


def match_score(model: MentalModel, keywords: Sequence[str]) -> float:
    """
    Keyword overlap between a model and the query, before boosts.

    Every (query keyword, model keyword) pair where one contains the other
    scores 1. Independently, every query keyword found verbatim in the
    model's lowercased name + definition scores 0.5, so a single match can
    be rewarded by both rules.
    """
    text = model_text(model)
    mkws = _model_keywords(text)
    score = 0.0
    for kw in keywords:
        for mk in mkws:
            if kw in mk or mk in kw:
                score += PAIR_MATCH
        if kw in text:
            score += RAW_TEXT_MATCH
    return score


def priority_bonus(model: MentalModel) -> float:
    """Priority 1 adds 1.0, priority 5 adds 0.2."""
    return (6 - model.priority) * PRIORITY_STEP


def score_breakdown(
    model: MentalModel,
    keywords: Sequence[str],
    boosts: Mapping[TransformationType, float],
) -> Tuple[float, float]:
    """Return (match score, final score) for one model."""
    matched = match_score(model, keywords)
    final = matched * boosts.get(model.transformation, 1.0)
    return matched, final + priority_bonus(model)


def score_model(
    model: MentalModel,
    keywords: Sequence[str],
    boosts: Mapping[TransformationType, float],
) -> float:
    """Final ranking score: match score x transformation boost + priority bonus."""
    return score_breakdown(model, keywords, boosts)[1]
