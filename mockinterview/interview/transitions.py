"""
Pure state transitions over the immutable Session record.

Every function takes a Session and returns a new one; nothing here performs
I/O. The orchestrator decides *when* a transition applies, these functions
decide *what* the next record looks like and refuse transitions whose
preconditions do not hold.
"""
from dataclasses import replace
from typing import Iterable, Optional

from ..config import ELABORATE_TIP, SKIPPED_ANSWER
from .emotion import parse_emotion_tags
from .errors import InvalidTransitionError
from .models import (
    AnswerFeedback, FinalReport, InterviewState, Personalization, Phase,
    ResponseRecord, Session,
)
from .pro_tips import select_tip


def _require(session: Session, phase: Phase,
             states: Optional[Iterable[InterviewState]] = None) -> None:
    if session.phase != phase:
        raise InvalidTransitionError(
            f"Expected phase {phase.value}, session is {session.phase.value}"
        )
    if states is not None and session.interview_state not in tuple(states):
        raise InvalidTransitionError(
            f"Interview state {session.interview_state.value} not allowed here"
        )


def restart(session: Session) -> Session:
    """Back to a pristine record; applying it twice equals applying it once."""
    return Session.initial(session.total_questions, session.interview_type)


def submit_personalization(session: Session,
                           personalization: Optional[Personalization]) -> Session:
    _require(session, Phase.PERSONALIZING)
    return replace(session, phase=Phase.SETTING_UP, personalization=personalization)


def begin_interview(session: Session) -> Session:
    """Enter the interview at question 1, about to fetch it."""
    _require(session, Phase.SETTING_UP)
    return replace(
        session,
        phase=Phase.INTERVIEWING,
        interview_state=InterviewState.THINKING,
        question_index=1,
        follow_up_count=0,
    )


def question_ready(session: Session, raw_text: str, is_follow_up: bool = False) -> Session:
    """
    Install a freshly generated question (or follow-up) as the current turn.

    Stage directions are stripped for display, the question is remembered so
    the generator does not repeat it, and a coaching tip is added to the feed.
    """
    _require(session, Phase.INTERVIEWING, (InterviewState.THINKING,))
    parsed = parse_emotion_tags(raw_text)
    tip = ELABORATE_TIP if is_follow_up else select_tip(parsed.clean)
    return replace(
        session,
        interview_state=InterviewState.RESPONDING,
        turn_id=session.turn_id + 1,
        current_question_raw=raw_text,
        current_question_display=parsed.clean,
        current_emotion=parsed.emotion,
        transcript="",
        asked_questions=session.asked_questions + (parsed.clean,),
        pro_tips=session.pro_tips + (tip,),
    )


def start_listening(session: Session) -> Session:
    _require(session, Phase.INTERVIEWING, (InterviewState.RESPONDING,))
    return replace(session, interview_state=InterviewState.LISTENING, transcript="")


def update_transcript(session: Session, text: str) -> Session:
    _require(session, Phase.INTERVIEWING, (InterviewState.LISTENING,))
    return replace(session, transcript=text)


def start_thinking(session: Session) -> Session:
    """Lock the turn while an answer is processed."""
    _require(session, Phase.INTERVIEWING, (InterviewState.LISTENING,))
    return replace(session, interview_state=InterviewState.THINKING)


def begin_follow_up(session: Session) -> Session:
    """Count a follow-up for the current question without advancing."""
    _require(session, Phase.INTERVIEWING, (InterviewState.THINKING,))
    return replace(session, follow_up_count=session.follow_up_count + 1)


def record_response(session: Session, answer: str,
                    feedback: Optional[AnswerFeedback] = None) -> Session:
    """Close the current question with its final answer."""
    _require(session, Phase.INTERVIEWING, (InterviewState.THINKING,))
    record = ResponseRecord(
        question=session.current_question_display,
        answer=answer,
        feedback=feedback,
    )
    return replace(
        session,
        responses=session.responses + (record,),
        last_feedback=feedback,
        transcript="",
    )


def record_skip(session: Session) -> Session:
    """Close the current question with the skip sentinel."""
    _require(session, Phase.INTERVIEWING, (InterviewState.LISTENING, InterviewState.RESPONDING))
    thinking = replace(session, interview_state=InterviewState.THINKING)
    return record_response(thinking, SKIPPED_ANSWER)


def advance(session: Session) -> Session:
    """Move to the next question; only valid once the current one is recorded."""
    _require(session, Phase.INTERVIEWING, (InterviewState.THINKING,))
    if session.is_last_question:
        raise InvalidTransitionError("No questions left to advance to")
    return replace(
        session,
        question_index=session.question_index + 1,
        follow_up_count=0,
    )


def rollback_to_listening(snapshot: Session) -> Session:
    """The record to restore when a submit or skip edge fails."""
    return replace(snapshot, interview_state=InterviewState.LISTENING)


def rollback_to_setup(snapshot: Session) -> Session:
    """The record to restore when the first question cannot be generated."""
    return replace(
        snapshot,
        phase=Phase.SETTING_UP,
        interview_state=InterviewState.IDLE,
    )


def begin_processing(session: Session) -> Session:
    _require(session, Phase.INTERVIEWING)
    if not session.responses:
        raise InvalidTransitionError("Cannot build a report without responses")
    return replace(
        session,
        phase=Phase.PROCESSING,
        interview_state=InterviewState.IDLE,
        transcript="",
    )


def report_failed(session: Session) -> Session:
    """Return to the interview so the user can retry ending it."""
    _require(session, Phase.PROCESSING)
    return replace(session, phase=Phase.INTERVIEWING, interview_state=InterviewState.IDLE)


def complete(session: Session, report: FinalReport) -> Session:
    _require(session, Phase.PROCESSING)
    return replace(
        session,
        phase=Phase.COMPLETE,
        interview_state=InterviewState.IDLE,
        final_report=report,
    )


def back_to_setup(session: Session) -> Session:
    """Abandon an interview with no answers, keeping the personalization."""
    _require(session, Phase.INTERVIEWING)
    fresh = Session.initial(session.total_questions, session.interview_type)
    return replace(
        fresh,
        phase=Phase.SETTING_UP,
        personalization=session.personalization,
    )
