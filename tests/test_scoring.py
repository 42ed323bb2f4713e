# =============================================
# File: tests/test_scoring.py
# Purpose: Per-model scoring (pair matches, raw-text bonus, boosts, priority)
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from hummbl_api.utils.recommend_core import MentalModel, TransformationType as T, transformation_for_code
from hummbl_api.utils.scoring import match_score, priority_bonus, score_breakdown, score_model


def _model(code="P9", name="Glacier", definition="glacier melt", priority=3):
    return MentalModel(code=code, name=name, definition=definition, priority=priority)


@pytest.mark.parametrize("code,tag", [
    ("IN3", T.IN), ("CO1", T.CO), ("DE20", T.DE), ("RE2", T.RE),
    ("SY9", T.SY), ("P7", T.P), ("X1", T.P), ("INCO1", T.IN),
])
def test_transformation_from_code_prefix(code, tag):
    assert transformation_for_code(code) == tag
    assert _model(code=code).transformation == tag


def test_pair_and_raw_text_matches_both_count():
    # "glaci" hits the model keyword twice (name + definition) and the raw text once
    m = _model()
    assert match_score(m, ["glaci"]) == pytest.approx(2.5)
    assert score_model(m, ["glaci"], {}) == pytest.approx(3.1)


def test_boost_multiplies_match_score_only():
    m = _model()
    assert score_model(m, ["glaci"], {T.P: 2.0}) == pytest.approx(5.6)
    # boost for another transformation is ignored
    assert score_model(m, ["glaci"], {T.DE: 3.0}) == pytest.approx(3.1)


def test_feedback_model_example():
    m = _model(code="RE4", name="Feedback Loops", definition="feedback", priority=2)
    matched, final = score_breakdown(m, ["feedback"], {T.RE: 1.5})
    assert matched == pytest.approx(2.5)
    assert final == pytest.approx(4.55)


def test_no_overlap_leaves_priority_bonus():
    assert score_model(_model(priority=1), ["xyzzy"], {}) == pytest.approx(1.0)
    assert score_model(_model(priority=5), ["xyzzy"], {}) == pytest.approx(0.2)
    assert match_score(_model(), []) == 0.0


@pytest.mark.parametrize("priority,bonus", [(1, 1.0), (2, 0.8), (3, 0.6), (4, 0.4), (5, 0.2)])
def test_priority_bonus(priority, bonus):
    assert priority_bonus(_model(priority=priority)) == pytest.approx(bonus)


def test_priority_out_of_range_rejected():
    with pytest.raises(ValueError):
        _model(priority=0)
    with pytest.raises(ValueError):
        _model(priority=6)
