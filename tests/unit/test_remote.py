import json

import pytest

from mockinterview.config import Config
from mockinterview.infrastructure.llm import EdgeFunctionError, LLMRequestError
from mockinterview.interview.errors import QuestionGenerationError, ReportGenerationError
from mockinterview.interview.models import AnswerFeedback, QuestionContext, ResponseRecord
from mockinterview.interview.remote import (
    EdgeAnalysisService, EdgeQuestionService, EdgeReportService,
    VertexAnalysisService, VertexQuestionService, VertexReportService, build_remote_services,
)
from mockinterview.interview.testing import MockLLMClient

REPORT = {
    "overallScore": 72, "communicationScore": 70, "confidenceScore": 68, "technicalScore": 76,
    "summary": "Decent.", "strengths": ["Clear"], "improvements": ["Depth"], "recommendations": ["Practice"],
}


class FakeEdgeClient:
    def __init__(self, response=None, error=None):
        self.response = response or {}
        self.error = error
        self.calls = []

    def invoke(self, request_type, **fields):
        self.calls.append((request_type, fields))
        if self.error is not None:
            raise self.error
        return self.response


class FailingLLM:
    def generate_content(self, *args, **kwargs):
        raise LLMRequestError("Vertex REST error 503", status_code=503)

    def generate_json(self, *args, **kwargs):
        raise LLMRequestError("Vertex REST error 503", status_code=503)


def _context(**overrides):
    values = dict(question_number=2, total_questions=5, previous_questions=["Intro?"],
                  interview_type="behavioral")
    values.update(overrides)
    return QuestionContext(**values)


def test_vertex_question_uses_persona_and_strips_quotes():
    llm = MockLLMClient(['  "[warm smile] Tell me about a challenge."  '])
    question = VertexQuestionService(llm).generate(_context())

    assert question == "[warm smile] Tell me about a challenge."
    request = llm.request_history[0]
    assert "Alex Chen" in request["system_instruction"]
    assert "BEHAVIORAL" in request["system_instruction"]
    assert request["temperature"] == 0.7


def test_vertex_question_failure_maps_error():
    with pytest.raises(QuestionGenerationError) as excinfo:
        VertexQuestionService(FailingLLM()).generate(_context())
    assert excinfo.value.status_code == 503


def test_vertex_question_empty_text():
    with pytest.raises(QuestionGenerationError):
        VertexQuestionService(MockLLMClient(['""'])).generate(_context())


def test_vertex_analysis():
    llm = MockLLMClient([json.dumps({"score": 82, "feedback": "Good example."})])
    feedback = VertexAnalysisService(llm).analyze("Q?", "A long answer")
    assert feedback == AnswerFeedback(score=82.0, feedback="Good example.")


def test_vertex_analysis_failure_is_none():
    assert VertexAnalysisService(FailingLLM()).analyze("Q?", "A") is None


def test_vertex_report():
    llm = MockLLMClient([json.dumps(REPORT)])
    responses = [ResponseRecord("Q1?", "A1"), ResponseRecord("Q2?", "[Skipped]")]
    report = VertexReportService(llm).generate(responses, "behavioral")

    assert report.overall_score == 72
    assert "Q2: Q2?\nA: [Skipped]" in llm.request_history[0]["prompt"]


def test_vertex_report_failures():
    with pytest.raises(ReportGenerationError):
        VertexReportService(FailingLLM()).generate([ResponseRecord("Q", "A")], "behavioral")
    with pytest.raises(ReportGenerationError):
        VertexReportService(MockLLMClient(['{"parseError": true}'])).generate(
            [ResponseRecord("Q", "A")], "behavioral"
        )


def test_edge_question_request_shape():
    client = FakeEdgeClient({"content": "[slight nod] Why this role?"})
    question = EdgeQuestionService(client).generate(_context(resume_text="resume"))

    assert question == "[slight nod] Why this role?"
    request_type, fields = client.calls[0]
    assert request_type == "generate_question"
    assert fields["context"] == {
        "questionNumber": 2,
        "totalQuestions": 5,
        "previousQuestions": ["Intro?"],
        "interviewType": "behavioral",
        "resumeText": "resume",
        "isFollowUp": False,
    }


def test_edge_question_error():
    client = FakeEdgeClient(error=EdgeFunctionError("Rate limit exceeded. Please try again later.", 429))
    with pytest.raises(QuestionGenerationError, match="Rate limit") as excinfo:
        EdgeQuestionService(client).generate(_context())
    assert excinfo.value.status_code == 429


def test_edge_analysis():
    client = FakeEdgeClient({"score": 64, "feedback": "Add detail.", "improvements": ["Detail"]})
    feedback = EdgeAnalysisService(client).analyze("Q?", "A")

    assert feedback.score == 64.0
    assert client.calls[0] == ("analyze_response", {"question": "Q?", "userResponse": "A"})
    assert EdgeAnalysisService(FakeEdgeClient(error=EdgeFunctionError("down"))).analyze("Q", "A") is None


def test_edge_report_sends_feedback():
    client = FakeEdgeClient(REPORT)
    responses = [
        ResponseRecord("Q1?", "A1", AnswerFeedback(score=70, feedback="ok")),
        ResponseRecord("Q2?", "[Skipped]"),
    ]
    report = EdgeReportService(client).generate(responses, "technical")

    assert report.technical_score == 76
    request_type, fields = client.calls[0]
    assert request_type == "generate_feedback"
    assert fields["interviewType"] == "technical"
    assert fields["allResponses"][0]["feedback"]["score"] == 70
    assert "feedback" not in fields["allResponses"][1]


def test_edge_report_error():
    client = FakeEdgeClient(error=EdgeFunctionError("AI credits exhausted. Please add more credits.", 402))
    with pytest.raises(ReportGenerationError, match="credits"):
        EdgeReportService(client).generate([ResponseRecord("Q", "A")], "behavioral")


def test_build_remote_services_by_backend():
    edge = Config(backend="edge", edge_function_url="https://edge.test")
    services = build_remote_services(edge)
    assert [type(s) for s in services] == [EdgeQuestionService, EdgeAnalysisService, EdgeReportService]

    vertex = Config(google_cloud_project="proj")
    services = build_remote_services(vertex)
    assert [type(s) for s in services] == [VertexQuestionService, VertexAnalysisService, VertexReportService]
    assert services[0].llm_client is services[2].llm_client
