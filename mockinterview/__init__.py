"""
mockinterview: AI mock-interview session orchestrator.

Drives a spoken mock interview turn by turn: generated questions with
stage directions, follow-ups for vague answers, per-answer scoring and a
final performance report.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.orchestrator import SessionOrchestrator, create_orchestrator
from .interview.models import Session, Phase, InterviewState, FinalReport

__all__ = ["SessionOrchestrator", "create_orchestrator", "Session", "Phase", "InterviewState", "FinalReport"]
