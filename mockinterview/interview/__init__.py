"""Interview system components.

This module contains the business logic for conducting AI mock interviews,
including the session state machine, turn policies, remote services and events.
"""

# Core orchestrator class
from .orchestrator import SessionOrchestrator, create_orchestrator

# Data models
from .models import (
    Phase, InterviewState, Emotion, Session, Personalization,
    ResponseRecord, AnswerFeedback, FinalReport, QuestionContext
)

# Pure turn policies
from .emotion import parse_emotion_tags, ParsedText
from .follow_up import needs_follow_up
from .pro_tips import select_tip

# Errors
from .errors import (
    InterviewError, RemoteServiceError, QuestionGenerationError,
    ReportGenerationError, CameraUnavailableError, InvalidTransitionError
)

# Service contracts and implementations
from .services import (
    RemoteQuestionService, RemoteAnalysisService, RemoteReportService, ProgressTracker
)
from .remote import (
    VertexQuestionService, VertexAnalysisService, VertexReportService,
    EdgeQuestionService, EdgeAnalysisService, EdgeReportService,
    build_remote_services
)

# Event system
from .events import (
    SessionEvent, SubmitPersonalization, StartInterview, QuestionReady, SpeechEnded,
    TranscriptUpdated, TranscriptSubmitted, Skip, EndEarly, RemoteFailure, Restart,
    InterviewEventBus, EventLogger, InterviewMetrics, EventType, InterviewEvent
)

__all__ = [
    # Orchestrator
    "SessionOrchestrator", "create_orchestrator",

    # Data models
    "Phase", "InterviewState", "Emotion", "Session", "Personalization",
    "ResponseRecord", "AnswerFeedback", "FinalReport", "QuestionContext",

    # Policies
    "parse_emotion_tags", "ParsedText", "needs_follow_up", "select_tip",

    # Errors
    "InterviewError", "RemoteServiceError", "QuestionGenerationError",
    "ReportGenerationError", "CameraUnavailableError", "InvalidTransitionError",

    # Services
    "RemoteQuestionService", "RemoteAnalysisService", "RemoteReportService", "ProgressTracker",
    "VertexQuestionService", "VertexAnalysisService", "VertexReportService",
    "EdgeQuestionService", "EdgeAnalysisService", "EdgeReportService",
    "build_remote_services",

    # Events
    "SessionEvent", "SubmitPersonalization", "StartInterview", "QuestionReady", "SpeechEnded",
    "TranscriptUpdated", "TranscriptSubmitted", "Skip", "EndEarly", "RemoteFailure", "Restart",
    "InterviewEventBus", "EventLogger", "InterviewMetrics", "EventType", "InterviewEvent",
]
