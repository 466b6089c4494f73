import pytest

from mockinterview.interview.models import AnswerFeedback
from mockinterview.interview.schemas import feedback_to_payload, parse_feedback, parse_report


def _report_payload(**overrides):
    payload = {
        "overallScore": 75,
        "communicationScore": 80,
        "confidenceScore": 65,
        "technicalScore": 78,
        "summary": " Good session. ",
        "strengths": ["Clear", ""],
        "improvements": "Pace yourself",
        "recommendations": [],
    }
    payload.update(overrides)
    return payload


def test_parse_feedback():
    feedback = parse_feedback({"score": "85", "feedback": "Nice.", "strengths": ["Concise"]})
    assert feedback == AnswerFeedback(score=85.0, feedback="Nice.", strengths=("Concise",))


def test_feedback_score_is_clamped():
    assert parse_feedback({"score": 140, "feedback": "x"}).score == 100.0
    assert parse_feedback({"score": -3, "feedback": "x"}).score == 0.0


@pytest.mark.parametrize("payload", [
    None,
    {},
    {"error": "model overloaded"},
    {"feedback": "no score"},
    {"score": "high", "feedback": "x"},
])
def test_unusable_feedback_is_none(payload):
    assert parse_feedback(payload) is None


def test_parse_report():
    report = parse_report(_report_payload(interviewerNotes="keep practicing"))
    assert report.overall_score == 75
    assert report.summary == "Good session."
    assert report.strengths == ("Clear",)
    assert report.improvements == ("Pace yourself",)
    assert report.recommendations == ()
    assert report.extras == {"interviewerNotes": "keep practicing"}


@pytest.mark.parametrize("payload", [
    {"error": "AI credits exhausted"},
    {"parseError": True, "raw": "not json"},
    {"overallScore": 70},
    "not an object",
])
def test_parse_report_rejects(payload):
    with pytest.raises(ValueError):
        parse_report(payload)


def test_feedback_payload_shape():
    feedback = AnswerFeedback(score=70, feedback="ok", strengths=("a",), improvements=("b",))
    assert feedback_to_payload(feedback) == {
        "score": 70, "feedback": "ok", "strengths": ["a"], "improvements": ["b"],
    }
    assert feedback_to_payload(None) is None
