"""
Testing infrastructure with mock services for the interview system.
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from ..config import MAX_FOLLOW_UPS
from ..infrastructure.media import HeadlessCamera
from .errors import QuestionGenerationError, ReportGenerationError
from .events import InterviewEvent, InterviewEventBus
from .models import (
    AnswerFeedback, FinalReport, InterviewState, Phase, QuestionContext, ResponseRecord, Session,
)
from .orchestrator import SessionOrchestrator

SUBSTANTIVE_ANSWER = (
    "In my last role I led the migration of our billing service to a new platform. "
    "I planned the rollout in stages, wrote the runbooks, and we finished two weeks early "
    "with zero downtime for customers."
)

SHORT_ANSWER = "I don't know"


class MockQuestionService:
    """Mock question service returning canned questions in order."""

    def __init__(self, questions: Optional[List[str]] = None, fail_on_calls: Sequence[int] = ()):
        self.questions = list(questions or [])
        self.fail_on_calls = set(fail_on_calls)
        self.contexts: List[QuestionContext] = []

    @property
    def call_count(self) -> int:
        return len(self.contexts)

    def generate(self, context: QuestionContext) -> str:
        """Return the next canned question, or fail on configured call numbers (1-based)."""
        self.contexts.append(context)
        if self.call_count in self.fail_on_calls:
            raise QuestionGenerationError("Mock question failure", status_code=500)
        if self.questions:
            return self.questions.pop(0)
        if context.is_follow_up:
            return f"[raised eyebrow] Could you say more about that? ({context.question_number})"
        return f"[slight nod] Mock question {context.question_number} of {context.total_questions}?"


class MockAnalysisService:
    """Mock analysis service; returns fixed feedback or None."""

    def __init__(self, score: Optional[float] = 80.0):
        self.score = score
        self.calls: List[Dict[str, str]] = []

    def analyze(self, question: str, answer: str) -> Optional[AnswerFeedback]:
        self.calls.append({"question": question, "answer": answer})
        if self.score is None:
            return None
        return AnswerFeedback(
            score=self.score,
            feedback="Clear structure and a concrete example.",
            strengths=("Specific example",),
            improvements=("Quantify the result",),
        )


class MockReportService:
    """Mock report service; can fail a fixed number of times first."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls: List[List[ResponseRecord]] = []

    def generate(self, responses: Sequence[ResponseRecord], interview_type: str) -> FinalReport:
        self.calls.append(list(responses))
        if self.failures > 0:
            self.failures -= 1
            raise ReportGenerationError("Mock report failure", status_code=500)
        return create_test_report()


class MockProgressTracker:
    """Mock progress tracker recording calls."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.records: List[Dict[str, Any]] = []

    def record(self, communication_score: float, confidence_score: float,
               technical_score: float, interview_type: str) -> None:
        if self.fail:
            raise OSError("Mock progress store unavailable")
        self.records.append({
            "communication_score": communication_score,
            "confidence_score": confidence_score,
            "technical_score": technical_score,
            "interview_type": interview_type,
        })


class MockSpeechController:
    """Mock speech controller; utterances complete immediately."""

    def __init__(self, speech_supported: bool = True, tts_supported: bool = True):
        self.is_speech_supported = speech_supported
        self.is_tts_supported = tts_supported
        self.spoken_messages: List[str] = []
        self.listening = False
        self.start_count = 0
        self.cancel_count = 0
        self._transcript = ""

    @property
    def transcript(self) -> str:
        return self._transcript

    def say(self, text: str) -> None:
        """Simulate the candidate speaking while the recognizer runs."""
        self._transcript = text

    async def speak(self, text: str) -> None:
        self.spoken_messages.append(text)

    def start_listening(self) -> None:
        self.listening = True
        self.start_count += 1
        self._transcript = ""

    async def stop_listening(self) -> str:
        self.listening = False
        return self._transcript

    def cancel(self) -> None:
        self.listening = False
        self.cancel_count += 1


class MockLLMClient:
    """Mock LLM client for testing Vertex-backed services."""

    def __init__(self, mock_responses: List[str]):
        self.mock_responses = mock_responses
        self.current_response_idx = 0
        self.request_history = []

    def generate_content(self, prompt_text: str, system_instruction: Optional[str] = None,
                         temperature: float = 0.0, **kwargs) -> str:
        """Return mock LLM response."""
        self.request_history.append({
            "prompt": prompt_text,
            "system_instruction": system_instruction,
            "temperature": temperature,
        })
        if self.current_response_idx < len(self.mock_responses):
            response = self.mock_responses[self.current_response_idx]
            self.current_response_idx += 1
            return response
        return "{}"

    def generate_json(self, prompt: str, system_instruction: Optional[str] = None) -> Dict[str, Any]:
        return json.loads(self.generate_content(prompt, system_instruction))


def create_test_report() -> FinalReport:
    return FinalReport(
        overall_score=78,
        communication_score=80,
        confidence_score=70,
        technical_score=82,
        summary="Solid, structured answers with room to quantify impact.",
        strengths=("Clear structure",),
        improvements=("Quantify results",),
        recommendations=("Practice STAR stories",),
    )


def create_mock_orchestrator(total_questions: int = 3,
                             questions: Optional[List[str]] = None,
                             question_failures: Sequence[int] = (),
                             report_failures: int = 0,
                             analysis_score: Optional[float] = 80.0,
                             speech: Optional[MockSpeechController] = None,
                             camera_available: bool = True,
                             progress_tracker: Optional[MockProgressTracker] = None) -> Dict[str, Any]:
    """Create an orchestrator wired to mock services, plus the mocks and captured events."""
    question_service = MockQuestionService(questions, question_failures)
    analysis_service = MockAnalysisService(analysis_score)
    report_service = MockReportService(report_failures)
    speech = speech or MockSpeechController()
    camera = HeadlessCamera(available=camera_available)
    tracker = progress_tracker or MockProgressTracker()
    event_bus = InterviewEventBus()
    events: List[InterviewEvent] = []
    event_bus.subscribe_all(events.append)

    orchestrator = SessionOrchestrator(
        question_service=question_service,
        analysis_service=analysis_service,
        report_service=report_service,
        speech=speech,
        camera=camera,
        progress_tracker=tracker,
        total_questions=total_questions,
        interview_type="behavioral",
        event_bus=event_bus,
        session_id="test-session",
    )
    return {
        "orchestrator": orchestrator,
        "question_service": question_service,
        "analysis_service": analysis_service,
        "report_service": report_service,
        "speech": speech,
        "camera": camera,
        "progress_tracker": tracker,
        "events": events,
    }


class SessionInvariants:
    """Helper for validating session records."""

    @staticmethod
    def validate(session: Session, turn_in_flight: bool = False) -> List[str]:
        """
        Check a session against the orchestrator's invariants.

        Returns:
            List of violation messages (empty if valid)
        """
        issues = []
        if session.follow_up_count > MAX_FOLLOW_UPS:
            issues.append(f"follow_up_count above cap: {session.follow_up_count}")
        if session.phase != Phase.INTERVIEWING and session.interview_state != InterviewState.IDLE:
            issues.append(f"interview_state {session.interview_state.value} outside the interview")
        if (session.phase == Phase.INTERVIEWING and not turn_in_flight
                and session.interview_state != InterviewState.IDLE
                and len(session.responses) != session.question_index - 1):
            issues.append(
                f"{len(session.responses)} responses at question {session.question_index}"
            )
        if (session.final_report is None) == (session.phase == Phase.COMPLETE):
            issues.append("final_report must be set exactly when complete")
        return issues

    @staticmethod
    def assert_valid(session: Session, turn_in_flight: bool = False) -> None:
        """Assert that the session is valid, raising AssertionError if not."""
        issues = SessionInvariants.validate(session, turn_in_flight)
        if issues:
            raise AssertionError(f"Invalid session: {'; '.join(issues)}")
