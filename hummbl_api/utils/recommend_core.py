# =============================================
# File: hummbl_api/utils/recommend_core.py
# Purpose: Core domain types shared by the recommender, catalog and routers
# =============================================

from __future__ import annotations
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TransformationType(str, Enum):
    """The six Base120 transformation domains."""
    P = "P"
    IN = "IN"
    CO = "CO"
    DE = "DE"
    RE = "RE"
    SY = "SY"

    @property
    def display_name(self) -> str:
        return TRANSFORMATION_NAMES[self]

    @property
    def description(self) -> str:
        return TRANSFORMATION_DESCRIPTIONS[self]


TRANSFORMATION_NAMES = {
    TransformationType.P: "Perspective",
    TransformationType.IN: "Inversion",
    TransformationType.CO: "Composition",
    TransformationType.DE: "Decomposition",
    TransformationType.RE: "Recursion",
    TransformationType.SY: "Systems",
}

TRANSFORMATION_DESCRIPTIONS = {
    TransformationType.P: "Shift viewpoints and reframe problems to see what was hidden.",
    TransformationType.IN: "Think in reverse: start from failure, opposites and constraints.",
    TransformationType.CO: "Combine and synthesize elements into stronger wholes.",
    TransformationType.DE: "Break complex problems into parts, causes and priorities.",
    TransformationType.RE: "Improve through iteration, feedback and self-reference.",
    TransformationType.SY: "See the whole system: loops, incentives, leverage and emergence.",
}

# Prefix tests run in this order; anything unmatched is a Perspective model.
_PREFIX_ORDER: Tuple[TransformationType, ...] = (
    TransformationType.IN,
    TransformationType.CO,
    TransformationType.DE,
    TransformationType.RE,
    TransformationType.SY,
)


def transformation_for_code(code: str) -> TransformationType:
    """Classify a model code (e.g. "DE3") into its transformation domain."""
    for tag in _PREFIX_ORDER:
        if code.startswith(tag.value):
            return tag
    return TransformationType.P


class MentalModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1)
    name: str
    definition: str
    priority: int = Field(..., ge=1, le=5)

    @property
    def transformation(self) -> TransformationType:
        return transformation_for_code(self.code)


class RecommendationResult(BaseModel):
    """
    Output of a recommendation run.
    - models: ranked models (len <= limit)
    - matched_patterns: display names of transformations the query leaned on
    - keywords_used: sample (<= 10) of the expanded query keywords
    - fallback: True when no model matched and priority-1 models were returned
    """
    models: List[MentalModel]
    matched_patterns: List[str] = Field(default_factory=list)
    keywords_used: List[str] = Field(default_factory=list)
    fallback: bool = False
