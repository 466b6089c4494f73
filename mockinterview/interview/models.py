"""
Data models for the interview system.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..config import MAX_FOLLOW_UPS, SKIPPED_ANSWER, TOTAL_QUESTIONS, INTERVIEW_TYPE


class Phase(str, Enum):
    """Top-level lifecycle stage of a session."""
    PERSONALIZING = "personalizing"
    SETTING_UP = "setting_up"
    INTERVIEWING = "interviewing"
    PROCESSING = "processing"
    COMPLETE = "complete"


class InterviewState(str, Enum):
    """What the current conversational turn is doing (only meaningful while interviewing)."""
    IDLE = "idle"
    THINKING = "thinking"
    LISTENING = "listening"
    RESPONDING = "responding"


class Emotion(str, Enum):
    """Display emotion derived from stage directions in generated text."""
    NEUTRAL = "neutral"
    SLIGHT_NOD = "slight_nod"
    THOUGHTFUL_PAUSE = "thoughtful_pause"
    WARM_SMILE = "warm_smile"
    THINKING = "thinking"
    ENCOURAGING_NOD = "encouraging_nod"
    LEAN_FORWARD = "lean_forward"
    RAISED_EYEBROW = "raised_eyebrow"


@dataclass(frozen=True)
class AnswerFeedback:
    """Per-answer analysis returned by the analysis service."""
    score: float
    feedback: str
    strengths: Tuple[str, ...] = ()
    improvements: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResponseRecord:
    """One resolved top-level question: answered, scored or skipped."""
    question: str
    answer: str
    feedback: Optional[AnswerFeedback] = None

    @property
    def skipped(self) -> bool:
        return self.answer == SKIPPED_ANSWER


@dataclass(frozen=True)
class Personalization:
    """Optional resume / job description / custom questions supplied before the interview."""
    resume_text: Optional[str] = None
    job_description: Optional[str] = None
    custom_questions: Tuple[str, ...] = ()

    def custom_question_for(self, question_index: int) -> Optional[str]:
        """Return the custom question for a 1-based index, if one was supplied."""
        if 1 <= question_index <= len(self.custom_questions):
            text = self.custom_questions[question_index - 1].strip()
            return text or None
        return None


@dataclass(frozen=True)
class FinalReport:
    """Final interview report."""
    overall_score: float
    communication_score: float
    confidence_score: float
    technical_score: float
    summary: str
    strengths: Tuple[str, ...] = ()
    improvements: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    # Optional extended fields the report backend may add
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class QuestionContext:
    """Context passed to the question service."""
    question_number: int
    total_questions: int
    previous_questions: List[str]
    interview_type: str
    resume_text: Optional[str] = None
    job_description: Optional[str] = None
    is_follow_up: bool = False
    previous_question: Optional[str] = None
    previous_answer: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """
    Immutable interview session record.

    Only the orchestrator creates new versions of this record, through the
    pure transitions in ``transitions.py``.
    """
    phase: Phase = Phase.PERSONALIZING
    interview_state: InterviewState = InterviewState.IDLE
    total_questions: int = TOTAL_QUESTIONS
    interview_type: str = INTERVIEW_TYPE
    question_index: int = 0
    follow_up_count: int = 0
    turn_id: int = 0
    current_question_raw: str = ""
    current_question_display: str = ""
    current_emotion: Emotion = Emotion.NEUTRAL
    transcript: str = ""
    responses: Tuple[ResponseRecord, ...] = ()
    asked_questions: Tuple[str, ...] = ()
    pro_tips: Tuple[str, ...] = ()
    last_feedback: Optional[AnswerFeedback] = None
    personalization: Optional[Personalization] = None
    final_report: Optional[FinalReport] = None

    def __post_init__(self):
        if not 0 <= self.follow_up_count <= MAX_FOLLOW_UPS:
            raise ValueError(f"follow_up_count out of range: {self.follow_up_count}")
        if self.total_questions < 1:
            raise ValueError("total_questions must be at least 1")
        if not 0 <= self.question_index <= self.total_questions:
            raise ValueError(
                f"question_index {self.question_index} outside 0..{self.total_questions}"
            )
        if self.final_report is not None and self.phase != Phase.COMPLETE:
            raise ValueError("final_report may only be set when the session is complete")

    @classmethod
    def initial(cls, total_questions: int = TOTAL_QUESTIONS,
                interview_type: str = INTERVIEW_TYPE) -> "Session":
        """Build the initial session record."""
        return cls(total_questions=total_questions, interview_type=interview_type)

    @property
    def is_last_question(self) -> bool:
        return self.question_index >= self.total_questions

    @property
    def turn_in_flight(self) -> bool:
        """True while a remote call for this session is outstanding."""
        return self.phase == Phase.PROCESSING or (
            self.phase == Phase.INTERVIEWING and self.interview_state == InterviewState.THINKING
        )
