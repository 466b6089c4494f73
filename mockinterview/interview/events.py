"""
Event-driven architecture for the interview system.

Two kinds of events live here:

- Session events flow *into* the orchestrator through ``dispatch``. They form
  a closed union; each one names an edge of the turn sequencer.
- Interview events flow *out* of the orchestrator through the event bus and
  carry notifications for the UI, logs and metrics.
"""
import logging
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .models import Personalization, Phase

logger = logging.getLogger("events")


# =============================================================================
# INBOUND: session events accepted by SessionOrchestrator.dispatch
# =============================================================================

@dataclass(frozen=True)
class SubmitPersonalization:
    """Resume/job description/custom questions entered (None means skipped)."""
    personalization: Optional[Personalization] = None


@dataclass(frozen=True)
class StartInterview:
    """User pressed start on the setup screen."""


@dataclass(frozen=True)
class QuestionReady:
    """The question service produced the next question or follow-up."""
    raw_text: str
    is_follow_up: bool = False


@dataclass(frozen=True)
class SpeechEnded:
    """Speech synthesis finished the utterance delivered for ``turn_id``."""
    turn_id: int


@dataclass(frozen=True)
class TranscriptUpdated:
    """Incremental recognition result while listening."""
    text: str


@dataclass(frozen=True)
class TranscriptSubmitted:
    """User submitted the answer. ``transcript`` overrides the recognizer's text."""
    transcript: Optional[str] = None


@dataclass(frozen=True)
class Skip:
    """User skipped the current question."""


@dataclass(frozen=True)
class EndEarly:
    """User ended the interview before the last question."""


@dataclass(frozen=True)
class RemoteFailure:
    """A remote call made for the current turn failed."""
    service: str
    error: Exception


@dataclass(frozen=True)
class Restart:
    """Discard everything and go back to personalization."""


SessionEvent = Union[
    SubmitPersonalization,
    StartInterview,
    QuestionReady,
    SpeechEnded,
    TranscriptUpdated,
    TranscriptSubmitted,
    Skip,
    EndEarly,
    RemoteFailure,
    Restart,
]


# =============================================================================
# OUTBOUND: notifications emitted on the event bus
# =============================================================================

class EventType(str, Enum):
    """Types of interview events."""
    PHASE_CHANGED = "phase_changed"
    QUESTION_ASKED = "question_asked"
    FOLLOW_UP_ASKED = "follow_up_asked"
    TIP_ADDED = "tip_added"
    ANSWER_RECORDED = "answer_recorded"
    QUESTION_SKIPPED = "question_skipped"
    FEEDBACK_READY = "feedback_ready"
    NO_RESPONSE_DETECTED = "no_response_detected"
    SESSION_COMPLETED = "session_completed"
    ERROR_OCCURRED = "error_occurred"


@dataclass
class InterviewEvent(ABC):
    """Base class for all interview events."""
    event_type: EventType
    session_id: str
    timestamp: float
    data: Dict[str, Any]


@dataclass
class PhaseChangedEvent(InterviewEvent):
    """Event fired when the session moves to another phase."""
    def __init__(self, session_id: str, timestamp: float, previous: Phase, current: Phase):
        super().__init__(
            event_type=EventType.PHASE_CHANGED,
            session_id=session_id,
            timestamp=timestamp,
            data={"previous": previous.value, "current": current.value}
        )


@dataclass
class QuestionAskedEvent(InterviewEvent):
    """Event fired when a new top-level question is delivered."""
    def __init__(self, session_id: str, timestamp: float, question_index: int,
                 question: str, emotion: str):
        super().__init__(
            event_type=EventType.QUESTION_ASKED,
            session_id=session_id,
            timestamp=timestamp,
            data={"question_index": question_index, "question": question, "emotion": emotion}
        )


@dataclass
class FollowUpAskedEvent(InterviewEvent):
    """Event fired when a follow-up replaces advancing to the next question."""
    def __init__(self, session_id: str, timestamp: float, question_index: int,
                 follow_up_count: int, question: str, emotion: str):
        super().__init__(
            event_type=EventType.FOLLOW_UP_ASKED,
            session_id=session_id,
            timestamp=timestamp,
            data={
                "question_index": question_index,
                "follow_up_count": follow_up_count,
                "question": question,
                "emotion": emotion,
            }
        )


@dataclass
class TipAddedEvent(InterviewEvent):
    """Event fired when a coaching tip is appended to the tip feed."""
    def __init__(self, session_id: str, timestamp: float, tip: str):
        super().__init__(
            event_type=EventType.TIP_ADDED,
            session_id=session_id,
            timestamp=timestamp,
            data={"tip": tip}
        )


@dataclass
class AnswerRecordedEvent(InterviewEvent):
    """Event fired when a response record is appended."""
    def __init__(self, session_id: str, timestamp: float, question_index: int,
                 question: str, answer: str, scored: bool):
        super().__init__(
            event_type=EventType.ANSWER_RECORDED,
            session_id=session_id,
            timestamp=timestamp,
            data={
                "question_index": question_index,
                "question": question,
                "answer": answer,
                "scored": scored,
            }
        )


@dataclass
class QuestionSkippedEvent(InterviewEvent):
    """Event fired when the user skips a question."""
    def __init__(self, session_id: str, timestamp: float, question_index: int, question: str):
        super().__init__(
            event_type=EventType.QUESTION_SKIPPED,
            session_id=session_id,
            timestamp=timestamp,
            data={"question_index": question_index, "question": question}
        )


@dataclass
class FeedbackReadyEvent(InterviewEvent):
    """Event fired when an answer has been scored."""
    def __init__(self, session_id: str, timestamp: float, question_index: int,
                 score: float, feedback: str):
        super().__init__(
            event_type=EventType.FEEDBACK_READY,
            session_id=session_id,
            timestamp=timestamp,
            data={"question_index": question_index, "score": score, "feedback": feedback}
        )


@dataclass
class NoResponseDetectedEvent(InterviewEvent):
    """Event fired when an empty answer is submitted."""
    def __init__(self, session_id: str, timestamp: float, question_index: int):
        super().__init__(
            event_type=EventType.NO_RESPONSE_DETECTED,
            session_id=session_id,
            timestamp=timestamp,
            data={
                "question_index": question_index,
                "message": "No response detected. Please try again.",
            }
        )


@dataclass
class SessionCompletedEvent(InterviewEvent):
    """Event fired when the final report is stored."""
    def __init__(self, session_id: str, timestamp: float, answered: int,
                 overall_score: float):
        super().__init__(
            event_type=EventType.SESSION_COMPLETED,
            session_id=session_id,
            timestamp=timestamp,
            data={"answered": answered, "overall_score": overall_score}
        )


@dataclass
class ErrorOccurredEvent(InterviewEvent):
    """Event fired when an error must be shown to the user."""
    def __init__(self, session_id: str, timestamp: float, error_type: str,
                 error_message: str, component: str):
        super().__init__(
            event_type=EventType.ERROR_OCCURRED,
            session_id=session_id,
            timestamp=timestamp,
            data={
                "error_type": error_type,
                "error_message": error_message,
                "component": component
            }
        )


EventHandler = Callable[[InterviewEvent], None]


class InterviewEventBus:
    """Event bus for interview system communication."""

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Subscribe to specific event type.

        Args:
            event_type: Type of event to listen for
            handler: Function to call when event occurs
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed handler to %s", event_type.value)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        self._global_handlers.append(handler)
        logger.debug("Subscribed global handler")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe from specific event type."""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug("Unsubscribed handler from %s", event_type.value)
            except ValueError:
                logger.warning("Handler not found for %s", event_type.value)

    def emit(self, event: InterviewEvent) -> None:
        """
        Emit an event to all subscribers.

        Handler failures are logged and never reach the emitter.
        """
        logger.debug("Emitting event: %s for session %s", event.event_type.value, event.session_id)

        for handler in list(self._handlers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error("Error in event handler for %s: %s", event.event_type.value, e)

        for handler in list(self._global_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error("Error in global event handler: %s", e)

    def clear_handlers(self) -> None:
        """Clear all event handlers."""
        self._handlers.clear()
        self._global_handlers.clear()
        logger.debug("Cleared all event handlers")


class EventLogger:
    """Logs all events for debugging and analysis."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger("event_logger")
        self.log_level = log_level

    def handle_event(self, event: InterviewEvent) -> None:
        """Log event details."""
        self.logger.log(
            self.log_level,
            "Event: %s | Session: %s | Data: %s",
            event.event_type.value, event.session_id, event.data,
        )


class InterviewMetrics:
    """Collects metrics from interview events."""

    _COUNTERS = {
        EventType.QUESTION_ASKED: "questions_asked",
        EventType.FOLLOW_UP_ASKED: "follow_ups_asked",
        EventType.ANSWER_RECORDED: "answers_recorded",
        EventType.QUESTION_SKIPPED: "questions_skipped",
        EventType.FEEDBACK_READY: "answers_scored",
        EventType.NO_RESPONSE_DETECTED: "empty_submissions",
        EventType.SESSION_COMPLETED: "sessions_completed",
        EventType.ERROR_OCCURRED: "errors_occurred",
    }

    def __init__(self):
        self.reset()

    def handle_event(self, event: InterviewEvent) -> None:
        """Update metrics based on event."""
        name = self._COUNTERS.get(event.event_type)
        if name is not None:
            self._counts[name] += 1

    def get_metrics(self) -> Dict[str, int]:
        """Get current metrics snapshot."""
        return dict(self._counts)

    def reset(self) -> None:
        """Reset all metrics to zero."""
        self._counts: Dict[str, int] = {name: 0 for name in self._COUNTERS.values()}
