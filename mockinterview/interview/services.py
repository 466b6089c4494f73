"""
Contracts for the collaborators the orchestrator calls out to.

Implementations are synchronous; the orchestrator runs them off the event
loop with ``asyncio.to_thread`` so a slow backend never blocks speech events.
"""
from typing import Optional, Protocol, Sequence, runtime_checkable

from .models import AnswerFeedback, FinalReport, QuestionContext, ResponseRecord


@runtime_checkable
class RemoteQuestionService(Protocol):
    """Generates the next interviewer statement."""

    def generate(self, context: QuestionContext) -> str:
        """
        Return raw question text (stage directions included).

        Must not repeat any entry of ``context.previous_questions``.

        Raises:
            RemoteServiceError: On transport or application failure
        """
        ...


@runtime_checkable
class RemoteAnalysisService(Protocol):
    """Scores a single answer."""

    def analyze(self, question: str, answer: str) -> Optional[AnswerFeedback]:
        """Return feedback, or None on any failure. Never raises."""
        ...


@runtime_checkable
class RemoteReportService(Protocol):
    """Builds the end-of-interview report."""

    def generate(self, responses: Sequence[ResponseRecord], interview_type: str) -> FinalReport:
        """
        Raises:
            RemoteServiceError: On transport or application failure
        """
        ...


@runtime_checkable
class ProgressTracker(Protocol):
    """Receives the scores of every completed session."""

    def record(self, communication_score: float, confidence_score: float,
               technical_score: float, interview_type: str) -> None:
        ...
