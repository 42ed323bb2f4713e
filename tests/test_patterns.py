# =============================================
# File: tests/test_patterns.py
# Purpose: Problem-pattern detection and transformation boosts
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from hummbl_api.utils.patterns import detect_patterns, matched_pattern_names
from hummbl_api.utils.recommend_core import TransformationType as T
from hummbl_api.utils.vocabulary import PROBLEM_PATTERNS, ProblemPattern


def test_no_keywords_no_boosts():
    assert detect_patterns([]) == {}
    assert matched_pattern_names({}) == []


def test_single_hit_adds_half_point():
    boosts = detect_patterns(["stuck"])
    assert boosts == {T.IN: 1.5}
    assert matched_pattern_names(boosts) == ["Inversion"]


def test_patterns_stack_across_transformations():
    # "risk" hits the inversion pattern and the decision pattern (DE, IN, P)
    boosts = detect_patterns(["risk"])
    assert boosts == {T.IN: 2.0, T.DE: 1.5, T.P: 1.5}
    assert list(boosts) == [T.IN, T.DE, T.P]
    assert matched_pattern_names(boosts) == ["Inversion", "Decomposition", "Perspective"]


def test_hits_are_capped_at_pattern_boost():
    boosts = detect_patterns(["complex", "break", "analysis", "root", "cause"])
    assert boosts[T.DE] == pytest.approx(3.0)


def test_substring_matching_both_directions():
    # pattern keyword "frame" sits inside "reframing"
    assert detect_patterns(["reframing"]).get(T.P, 1.0) > 1.0


def test_threshold_is_exclusive():
    assert matched_pattern_names({T.RE: 1.2}) == []
    assert matched_pattern_names({T.RE: 1.25}) == ["Recursion"]


def test_custom_pattern_table():
    pats = (ProblemPattern("loops", ("loop", "cycle"), (T.RE,), 2.0),)
    assert detect_patterns(["cycle", "loop"], patterns=pats) == {T.RE: 2.0}
    assert detect_patterns(["banana"], patterns=pats) == {}


def test_pattern_boost_must_be_at_least_one():
    with pytest.raises(ValueError):
        ProblemPattern("bad", ("x",), (T.P,), 0.5)


def test_every_transformation_has_a_pattern():
    covered = {t for p in PROBLEM_PATTERNS for t in p.transformations}
    assert covered == set(T)
