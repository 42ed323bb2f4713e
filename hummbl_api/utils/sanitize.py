# =============================================
# File: hummbl_api/utils/sanitize.py
# Purpose: Input screening (prompt-injection cues, PII) and output guardrails
# =============================================
from __future__ import annotations
import json
import re
from typing import Any, Dict, List, Optional, Tuple

from hummbl_api.utils import slog
from hummbl_api.utils.keywords import normalize_text

MAX_INPUT_CHARS = 10_000
MAX_OUTPUT_CHARS = 50_000

_INJECTION_CUES = [
    re.compile(r"ignore previous instructions", re.IGNORECASE),
    re.compile(r"ignore the above", re.IGNORECASE),
    re.compile(r"system prompt", re.IGNORECASE),
    re.compile(r"you are now", re.IGNORECASE),
    re.compile(r"you are a \w+ assistant", re.IGNORECASE),
    re.compile(r"new instruction", re.IGNORECASE),
    re.compile(r"override", re.IGNORECASE),
    re.compile(r"disregard", re.IGNORECASE),
    re.compile(r"forget everything", re.IGNORECASE),
    re.compile(r"<!\[CDATA\[", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),  # inline handlers: onclick=, onerror=
]

# Order matters for redaction: card numbers before phone numbers.
_PII_PATTERNS: Dict[str, re.Pattern] = {
    "ssn": re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),
    "credit_card": re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b"),
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
    "phone": re.compile(r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b"),
    "api_key": re.compile(r"(?:api[_-]?key|apikey)\s*[:=]\s*['\"]?[\w-]{20,}['\"]?", re.IGNORECASE),
    "password": re.compile(r"(?:password|passwd|pwd)\s*[:=]\s*['\"]?[^\s'\"]+['\"]?", re.IGNORECASE),
    "token": re.compile(r"(?:token|auth)\s*[:=]\s*['\"]?[\w-]{20,}['\"]?", re.IGNORECASE),
    "private_key": re.compile(r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----", re.IGNORECASE),
}

_REDACTION_LABELS = {
    "ssn": "[REDACTED-SSN]",
    "credit_card": "[REDACTED-CC]",
    "email": "[REDACTED-EMAIL]",
    "phone": "[REDACTED-PHONE]",
    "api_key": "[REDACTED-API-KEY]",
    "password": "[REDACTED-PASSWORD]",
    "token": "[REDACTED-TOKEN]",
    "private_key": "[REDACTED-PRIVATE-KEY]",
}

_EXFILTRATION_PATTERNS = [
    re.compile(r"https?://\S+(?:base64|encode|data:text)", re.IGNORECASE),
    re.compile(r"webhook.*\{[\s\S]{1000,}\}", re.IGNORECASE),
    re.compile(r"\b(?:password|secret|key|token)\s*[:=]\s*['\"][^'\"]{10,}['\"]", re.IGNORECASE),
]


def validate_input(text: Any) -> Tuple[bool, Optional[str]]:
    """
    Screen user text before it reaches the recommender.

    Returns (valid, reason). Prompt-injection hits are logged as
    security events with a hash of the text, never the text itself.
    """
    if not isinstance(text, str) or not text.strip():
        return False, "Input must be a non-empty string"
    for pat in _INJECTION_CUES:
        if pat.search(text):
            slog.security_event(
                "prompt_injection_attempt",
                "HIGH",
                pattern=pat.pattern,
                qhash=slog.qhash(text),
            )
            return False, "Potential prompt injection detected"
    if len(text) > MAX_INPUT_CHARS:
        return False, f"Input exceeds maximum length ({MAX_INPUT_CHARS} chars)"
    return True, None


def detect_pii(text: str) -> Dict[str, Any]:
    types: List[str] = []
    matches: List[str] = []
    for kind, pat in _PII_PATTERNS.items():
        found = [m.group(0) for m in pat.finditer(text or "")]
        if found:
            types.append(kind)
            matches.extend(found)
    return {"found": bool(types), "types": types, "matches": matches[:10]}


def redact_pii(text: str) -> str:
    out = text or ""
    for kind, pat in _PII_PATTERNS.items():
        out = pat.sub(_REDACTION_LABELS[kind], out)
    return out


def redact_for_ranking(text: str) -> Tuple[str, List[str]]:
    """
    Redact PII from a problem the way the keyword extractor will read it.

    Returns (redacted text, PII kinds found). The first pass runs on the
    raw text, where emails and key=value secrets still have their
    punctuation. The text is then normalized like keyword extraction does,
    which splits numbers glued to "_" or non-ASCII letters (no word
    boundary on the raw text), and a second pass redacts those.
    """
    kinds = detect_pii(text)["types"]
    flat = normalize_text(redact_pii(text))
    for kind in detect_pii(flat)["types"]:
        if kind not in kinds:
            kinds.append(kind)
    return redact_pii(flat), kinds


def validate_output(payload: Any) -> Tuple[bool, Optional[str]]:
    """Check a response payload for PII leakage, exfiltration patterns and size."""
    blob = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False, default=str)

    pii = detect_pii(blob)
    if pii["found"]:
        slog.security_event("pii_leakage_detected", "CRITICAL", types=pii["types"])
        return False, f"Output contains PII: {', '.join(pii['types'])}"

    for pat in _EXFILTRATION_PATTERNS:
        if pat.search(blob):
            slog.security_event("potential_exfiltration", "HIGH", pattern=pat.pattern)
            return False, "Potential data exfiltration pattern detected"

    if len(blob) > MAX_OUTPUT_CHARS:
        return False, f"Output exceeds maximum size ({MAX_OUTPUT_CHARS} chars)"
    return True, None
