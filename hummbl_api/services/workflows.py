# =============================================
# File: hummbl_api/services/workflows.py
# Purpose: Curated multi-model workflows and a keyword matcher that picks them for a problem
# =============================================

from __future__ import annotations
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger


@dataclass(frozen=True)
class WorkflowStep:
    order: int
    model_code: str
    purpose: str  # why this model at this stage


@dataclass(frozen=True)
class Workflow:
    id: str
    name: str
    description: str
    problem_types: Tuple[str, ...]  # trigger keywords
    steps: Tuple[WorkflowStep, ...]

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["problem_types"] = list(self.problem_types)
        d["steps"] = [asdict(s) for s in self.steps]
        return d


def _steps(*rows: Tuple[str, str]) -> Tuple[WorkflowStep, ...]:
    return tuple(WorkflowStep(order=i, model_code=c, purpose=p) for i, (c, p) in enumerate(rows, start=1))


WORKFLOWS: Tuple[Workflow, ...] = (
    Workflow(
        id="strategic-decision",
        name="Strategic Decision Making",
        description="Navigate complex decisions with multiple stakeholders and long-term consequences",
        problem_types=("decision", "strategy", "strategic", "choose", "choice", "option", "direction", "path"),
        steps=_steps(
            ("DE1", "Break down to fundamental truths"),
            ("P2", "Map all stakeholders and their interests"),
            ("IN1", "Invert to find hidden risks"),
            ("SY3", "Trace second and third-order effects"),
            ("DE15", "Map decision branches and consequences"),
        ),
    ),
    Workflow(
        id="root-cause",
        name="Root Cause Analysis",
        description="Dig past symptoms to find the true source of problems",
        problem_types=("root", "cause", "why", "diagnose", "symptom", "underlying", "source", "origin", "keeps happening"),
        steps=_steps(
            ("DE2", 'Ask "why" repeatedly to reach root cause'),
            ("DE7", "Separate signal from noise"),
            ("IN5", "Conduct failure post-mortem"),
            ("SY1", "Map the feedback loops at play"),
            ("RE1", "Establish continuous improvement"),
        ),
    ),
    Workflow(
        id="stakeholder-alignment",
        name="Stakeholder Alignment",
        description="Build consensus and align diverse interests toward common goals",
        problem_types=("stakeholder", "align", "consensus", "buy-in", "convince", "persuade", "agreement", "politics", "conflict"),
        steps=_steps(
            ("P2", "Identify all stakeholders and interests"),
            ("P1", "See situation from each perspective"),
            ("IN11", "Surface objections through devil's advocate"),
            ("CO3", "Find common ground and shared interests"),
            ("SY16", "Position within the broader ecosystem"),
        ),
    ),
    Workflow(
        id="innovation",
        name="Innovation Sprint",
        description="Generate breakthrough ideas by challenging assumptions and combining concepts",
        problem_types=("innovate", "innovation", "creative", "new", "idea", "brainstorm", "breakthrough", "disrupt", "invent"),
        steps=_steps(
            ("DE1", "Question every assumption"),
            ("P3", "Reframe the problem entirely"),
            ("IN3", "Ask what would make this impossible"),
            ("CO1", "Combine ideas from different domains"),
            ("RE3", "Prototype and iterate rapidly"),
        ),
    ),
    Workflow(
        id="crisis-response",
        name="Crisis Response",
        description="Navigate urgent situations with clarity and systematic action",
        problem_types=("crisis", "urgent", "emergency", "fire", "disaster", "critical", "immediate", "failing", "broken"),
        steps=_steps(
            ("DE4", "Focus on what you can control"),
            ("DE3", "Identify the vital few priorities"),
            ("IN2", "Define the must-not-fail constraints"),
            ("RE4", "Establish tight feedback loops"),
            ("CO7", "Build redundancy for resilience"),
        ),
    ),
    Workflow(
        id="team-performance",
        name="Team Performance",
        description="Diagnose and improve how teams work together",
        problem_types=("team", "collaborate", "coordination", "dysfunction", "conflict", "productivity", "morale", "culture"),
        steps=_steps(
            ("SY1", "Identify the feedback loops affecting behavior"),
            ("SY9", "Understand how incentives shape actions"),
            ("P2", "Map stakeholders and their real interests"),
            ("IN8", "Surface assumptions through steel-manning"),
            ("RE11", "Build calibration and feedback mechanisms"),
        ),
    ),
    Workflow(
        id="complexity-taming",
        name="Taming Complexity",
        description="Make sense of complex systems with many interacting parts",
        problem_types=("complex", "complicated", "overwhelm", "confusing", "tangled", "messy", "chaos", "too many"),
        steps=_steps(
            ("DE6", "Find natural boundaries and seams"),
            ("DE3", "Identify the vital few that matter most"),
            ("SY2", "Understand how parts interact"),
            ("CO4", "See the forest and the trees"),
            ("SY6", "Find leverage points for change"),
        ),
    ),
    Workflow(
        id="risk-assessment",
        name="Risk Assessment",
        description="Identify, evaluate, and prepare for potential failures",
        problem_types=("risk", "danger", "threat", "vulnerability", "failure", "worst case", "downside", "protect"),
        steps=_steps(
            ("IN4", "Imagine everything going wrong"),
            ("IN1", "Think backwards from failure"),
            ("SY3", "Trace cascading consequences"),
            ("DE5", "Distinguish reversible from irreversible"),
            ("CO7", "Build redundancy and resilience"),
        ),
    ),
    Workflow(
        id="learning-growth",
        name="Learning & Growth",
        description="Accelerate personal or organizational learning",
        problem_types=("learn", "growth", "improve", "skill", "develop", "master", "better", "progress", "stuck"),
        steps=_steps(
            ("RE1", "Commit to continuous small improvements"),
            ("RE4", "Create fast feedback loops"),
            ("IN5", "Learn from failures systematically"),
            ("P6", "Seek out opposing perspectives"),
            ("RE11", "Build calibration mechanisms"),
        ),
    ),
    Workflow(
        id="system-design",
        name="System Design",
        description="Architect robust systems that scale and adapt",
        problem_types=("design", "architect", "build", "system", "scale", "infrastructure", "platform", "structure"),
        steps=_steps(
            ("DE6", "Define clean interfaces and boundaries"),
            ("CO5", "Create modular, composable parts"),
            ("SY1", "Design healthy feedback loops"),
            ("CO7", "Build in redundancy and fault tolerance"),
            ("SY7", "Consider path dependence and lock-in"),
        ),
    ),
)

_BY_ID: Dict[str, Workflow] = {w.id: w for w in WORKFLOWS}
_WORD_RE_CACHE: Dict[str, re.Pattern] = {
    kw: re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE)
    for w in WORKFLOWS
    for kw in w.problem_types
}

SUBSTRING_HIT = 1.0
WHOLE_WORD_BONUS = 0.5


def score_workflow(workflow: Workflow, problem: str) -> float:
    """1 per trigger keyword found as a substring, +0.5 when it is also a whole word."""
    text = problem or ""
    lowered = text.lower()
    score = 0.0
    for kw in workflow.problem_types:
        if kw in lowered:
            score += SUBSTRING_HIT
            if _WORD_RE_CACHE[kw].search(text):
                score += WHOLE_WORD_BONUS
    return score


def match_workflows(problem: str, limit: int = 3) -> List[Workflow]:
    """Workflows with a positive score, best first (ties keep table order)."""
    scored = [(w, score_workflow(w, problem)) for w in WORKFLOWS]
    scored = [pair for pair in scored if pair[1] > 0]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    picks = [w for w, _ in scored[: max(0, limit)]]
    logger.info(f"[workflows] matched={[w.id for w in picks]}")
    return picks


def get_workflow(workflow_id: str) -> Optional[Workflow]:
    return _BY_ID.get(workflow_id)


def all_workflows() -> List[Workflow]:
    return list(WORKFLOWS)
