# =============================================
# File: hummbl_api/utils/vocabulary.py
# Purpose: Static vocabulary tables for the recommender (stopwords, synonyms, problem patterns)
# =============================================
"""
Read-only lookup tables shared by every recommendation call.

Everything here is built once at import and exposed through immutable
containers (frozenset, tuple, MappingProxyType). Nothing in the package
writes to these tables.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from .recommend_core import TransformationType

P = TransformationType.P
IN = TransformationType.IN
CO = TransformationType.CO
DE = TransformationType.DE
RE = TransformationType.RE
SY = TransformationType.SY


STOPWORDS: FrozenSet[str] = frozenset(
    """
    i me my myself we our ours ourselves you your yours yourself yourselves
    he him his himself she her hers herself it its itself they them their
    theirs themselves what which who whom this that these those am is are was
    were be been being have has had having do does did doing a an the and but
    if or because as until while of at by for with about against between into
    through during before after above below to from up down in out on off over
    under again further then once here there when where why how all each few
    more most other some such no nor not only own same so than too very s t
    can will just don should now d ll m o re ve y ain aren couldn didn doesn
    hadn hasn haven isn ma mightn mustn needn shan shouldn wasn weren won
    wouldn im ive id youre youve youll youd hes shes theyre theyve theyll
    theyd wont dont didnt cant couldnt shouldnt wouldnt really actually
    basically currently always never sometimes often usually maybe perhaps
    probably need want like get got getting going know think feel feeling try
    trying help helping
    """.split()
)


SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "problem": ("issue", "challenge", "difficulty", "trouble", "obstacle"),
    "solution": ("answer", "fix", "resolution", "remedy"),
    "analyze": ("examine", "study", "investigate", "assess", "evaluate"),
    "understand": ("comprehend", "grasp", "fathom", "perceive"),
    "decide": ("choose", "determine", "select", "pick"),
    "improve": ("enhance", "better", "upgrade", "optimize", "refine"),
    "break": ("decompose", "divide", "split", "separate", "dissect"),
    "combine": ("merge", "integrate", "unite", "synthesize", "blend"),
    "stuck": ("blocked", "stalled", "halted", "trapped", "gridlocked"),
    "complex": ("complicated", "intricate", "convoluted", "elaborate"),
    "simple": ("basic", "straightforward", "elementary", "fundamental"),
    "strategy": ("plan", "approach", "tactic", "method"),
    "team": ("group", "crew", "squad", "staff", "colleagues"),
    "goal": ("objective", "target", "aim", "purpose", "mission"),
    "feedback": ("response", "input", "reaction", "critique"),
    "risk": ("danger", "threat", "hazard", "peril"),
    "opportunity": ("chance", "possibility", "opening", "prospect"),
})


@dataclass(frozen=True)
class ProblemPattern:
    """A family of problem phrasings that points at one or more transformations."""
    name: str
    keywords: Tuple[str, ...]
    transformations: Tuple[TransformationType, ...]
    boost: float  # cap on the boost one pattern can add per transformation

    def __post_init__(self) -> None:
        if self.boost < 1:
            raise ValueError(f"pattern {self.name!r}: boost must be >= 1")


PROBLEM_PATTERNS: Tuple[ProblemPattern, ...] = (
    ProblemPattern(
        name="perspective",
        keywords=(
            "perspective", "viewpoint", "angle", "frame", "reframe", "see",
            "view", "understand", "interpret", "meaning", "context",
            "stakeholder", "audience", "empathy", "bias", "assumption",
            "blind", "spot",
        ),
        transformations=(P,),
        boost=2.0,
    ),
    ProblemPattern(
        name="inversion",
        keywords=(
            "stuck", "blocked", "obstacle", "barrier", "cant", "unable",
            "fail", "failure", "wrong", "mistake", "error", "avoid",
            "prevent", "risk", "worst", "opposite", "reverse", "flip",
            "invert", "negative", "critique", "devil", "advocate",
            "premortem", "postmortem",
        ),
        transformations=(IN,),
        boost=2.0,
    ),
    ProblemPattern(
        name="composition",
        keywords=(
            "combine", "integrate", "merge", "synthesize", "connect", "link",
            "bridge", "unify", "together", "collaborate", "team", "synergy",
            "holistic", "whole", "complete", "network", "ecosystem",
            "platform",
        ),
        transformations=(CO,),
        boost=2.0,
    ),
    ProblemPattern(
        name="decomposition",
        keywords=(
            "complex", "complicated", "overwhelming", "confusing", "unclear",
            "break", "breakdown", "analyze", "analysis", "dissect",
            "separate", "isolate", "root", "cause", "why", "factor",
            "component", "part", "piece", "simplify", "prioritize",
            "priority", "important", "critical", "essential", "pareto",
            "80/20",
        ),
        transformations=(DE,),
        boost=2.0,
    ),
    ProblemPattern(
        name="recursion",
        keywords=(
            "improve", "improvement", "better", "iterate", "iteration",
            "learn", "learning", "feedback", "loop", "cycle", "repeat",
            "refine", "optimize", "continuous", "progress", "grow", "growth",
            "develop", "evolve", "adapt", "calibrate", "update", "version",
        ),
        transformations=(RE,),
        boost=2.0,
    ),
    ProblemPattern(
        name="systems",
        keywords=(
            "system", "systems", "strategy", "strategic", "coordinate",
            "coordination", "align", "alignment", "govern", "governance",
            "policy", "incentive", "leverage", "scale", "organization",
            "organizational", "structure", "architecture", "design",
            "ecosystem", "dynamics", "equilibrium", "tipping", "threshold",
            "emergent", "emergence",
        ),
        transformations=(SY,),
        boost=2.0,
    ),
    ProblemPattern(
        name="decision",
        keywords=(
            "decide", "decision", "choice", "choose", "option", "alternative",
            "tradeoff", "trade-off", "evaluate", "compare", "weigh",
            "uncertain", "uncertainty", "risk",
        ),
        transformations=(DE, IN, P),
        boost=1.5,
    ),
    ProblemPattern(
        name="communication",
        keywords=(
            "communicate", "communication", "explain", "present",
            "presentation", "convince", "persuade", "narrative", "story",
            "message", "audience",
        ),
        transformations=(P, CO),
        boost=1.5,
    ),
    ProblemPattern(
        name="planning",
        keywords=(
            "plan", "planning", "roadmap", "timeline", "schedule",
            "milestone", "project", "execute", "execution", "implement",
            "implementation",
        ),
        transformations=(DE, RE, SY),
        boost=1.5,
    ),
)
