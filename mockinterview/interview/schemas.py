"""
Parsing and validation of payloads returned by the remote services.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from .models import AnswerFeedback, FinalReport

REPORT_FIELDS = {
    "overallScore": "overall_score",
    "communicationScore": "communication_score",
    "confidenceScore": "confidence_score",
    "technicalScore": "technical_score",
}
REPORT_LIST_FIELDS = ("strengths", "improvements", "recommendations")


def _string_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value if str(item).strip())
    return ()


def _score(value: Any, name: str) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}")
    return max(0.0, min(100.0, score))


def parse_feedback(payload: Optional[Dict[str, Any]]) -> Optional[AnswerFeedback]:
    """
    Convert an analysis payload into AnswerFeedback.

    Returns None for missing, errored or malformed payloads; a missing score
    never blocks the interview.
    """
    if not payload or not isinstance(payload, dict) or payload.get("error"):
        return None
    if "score" not in payload or "feedback" not in payload:
        return None
    try:
        score = _score(payload["score"], "score")
    except ValueError:
        return None
    return AnswerFeedback(
        score=score,
        feedback=str(payload.get("feedback") or "").strip(),
        strengths=_string_tuple(payload.get("strengths")),
        improvements=_string_tuple(payload.get("improvements")),
    )


def parse_report(payload: Dict[str, Any]) -> FinalReport:
    """
    Convert a report payload (camelCase keys) into a FinalReport.

    Raises:
        ValueError: If the payload is an error or misses a required score
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Report payload must be an object, got {type(payload).__name__}")
    if payload.get("error"):
        raise ValueError(str(payload["error"]))
    if payload.get("parseError"):
        raise ValueError("Report backend returned unparseable content")

    scores = {}
    for key, attr in REPORT_FIELDS.items():
        if key not in payload:
            raise ValueError(f"Report missing '{key}'")
        scores[attr] = _score(payload[key], key)

    known = set(REPORT_FIELDS) | set(REPORT_LIST_FIELDS) | {"summary"}
    extras = {k: v for k, v in payload.items() if k not in known}

    return FinalReport(
        summary=str(payload.get("summary") or "").strip(),
        strengths=_string_tuple(payload.get("strengths")),
        improvements=_string_tuple(payload.get("improvements")),
        recommendations=_string_tuple(payload.get("recommendations")),
        extras=extras,
        **scores,
    )


def feedback_to_payload(feedback: Optional[AnswerFeedback]) -> Optional[Dict[str, Any]]:
    """Serialize feedback back into the wire shape used by the report service."""
    if feedback is None:
        return None
    return {
        "score": feedback.score,
        "feedback": feedback.feedback,
        "strengths": list(feedback.strengths),
        "improvements": list(feedback.improvements),
    }
