"""
Interview session orchestrator.

Owns the Session record and sequences one conversational turn at a time:
question → speech → listening → decision → follow-up or next question →
report. All state changes go through the pure functions in ``transitions``;
this module decides when they apply and performs the side effects.
"""
import asyncio
import logging
import time
import uuid
from typing import Awaitable, Callable, Dict, Optional, Sequence

from ..config import Config, FALLBACK_FOLLOW_UP, INTERVIEW_TYPE, TOTAL_QUESTIONS
from ..infrastructure.data import JsonProgressStore
from ..infrastructure.media import CameraController
from ..infrastructure.speech import SpeechIOController
from . import transitions
from .errors import (
    CameraUnavailableError, InterviewError, InvalidTransitionError, QuestionGenerationError,
    RemoteServiceError, ReportGenerationError,
)
from .events import (
    EndEarly, QuestionReady, RemoteFailure, Restart, SessionEvent, Skip, SpeechEnded,
    StartInterview, SubmitPersonalization, TranscriptSubmitted, TranscriptUpdated,
    InterviewEventBus, EventLogger, InterviewMetrics, InterviewEvent,
    AnswerRecordedEvent, ErrorOccurredEvent, FeedbackReadyEvent, FollowUpAskedEvent,
    NoResponseDetectedEvent, PhaseChangedEvent, QuestionAskedEvent, QuestionSkippedEvent,
    SessionCompletedEvent, TipAddedEvent,
)
from .follow_up import needs_follow_up
from .models import (
    AnswerFeedback, FinalReport, InterviewState, Personalization, Phase, QuestionContext, Session,
)
from .remote import build_remote_services
from .services import ProgressTracker, RemoteAnalysisService, RemoteQuestionService, RemoteReportService

logger = logging.getLogger("orchestrator")


class SessionOrchestrator:
    """
    State machine driving a single mock interview.

    ``dispatch`` is the only way to change the session. Events that arrive
    while the session cannot accept them (a double submit while the answer is
    being processed, a speech completion for a question that was skipped) are
    logged and ignored. Failures revert the session first, then emit an
    ERROR_OCCURRED notification, then raise to the caller.
    """

    def __init__(self,
                 question_service: RemoteQuestionService,
                 analysis_service: RemoteAnalysisService,
                 report_service: RemoteReportService,
                 speech: SpeechIOController,
                 camera: CameraController,
                 progress_tracker: Optional[ProgressTracker] = None,
                 total_questions: int = TOTAL_QUESTIONS,
                 interview_type: str = INTERVIEW_TYPE,
                 enable_tts: bool = True,
                 event_bus: Optional[InterviewEventBus] = None,
                 session_id: Optional[str] = None):
        self.question_service = question_service
        self.analysis_service = analysis_service
        self.report_service = report_service
        self.speech = speech
        self.camera = camera
        self.progress_tracker = progress_tracker
        self.enable_tts = enable_tts
        self.session_id = session_id or uuid.uuid4().hex[:12]

        self._session = Session.initial(total_questions, interview_type)
        # Record to restore if the remote call currently in flight fails
        self._rollback: Optional[Session] = None
        # Bumped on restart/teardown; results of older calls are dropped
        self._generation = 0

        # Initialize event system
        self.event_bus = event_bus or InterviewEventBus()
        self.event_logger = EventLogger()
        self.metrics = InterviewMetrics()
        self.event_bus.subscribe_all(self.event_logger.handle_event)
        self.event_bus.subscribe_all(self.metrics.handle_event)

        self._handlers: Dict[type, Callable[..., Awaitable[None]]] = {
            SubmitPersonalization: self._on_submit_personalization,
            StartInterview: self._on_start_interview,
            QuestionReady: self._on_question_ready,
            SpeechEnded: self._on_speech_ended,
            TranscriptUpdated: self._on_transcript_updated,
            TranscriptSubmitted: self._on_transcript_submitted,
            Skip: self._on_skip,
            EndEarly: self._on_end_early,
            RemoteFailure: self._on_remote_failure,
            Restart: self._on_restart,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def speaks(self) -> bool:
        """True when questions are delivered through speech synthesis."""
        return self.enable_tts and self.speech.is_tts_supported

    async def dispatch(self, event: SessionEvent) -> None:
        """Apply one event to the session."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unknown session event: {event!r}")
        logger.debug("Dispatching %s (phase=%s, state=%s)", type(event).__name__,
                      self._session.phase.value, self._session.interview_state.value)
        await handler(event)

    async def submit_personalization(self, personalization: Optional[Personalization] = None) -> None:
        await self.dispatch(SubmitPersonalization(personalization))

    async def start_interview(self) -> None:
        await self.dispatch(StartInterview())

    async def update_transcript(self, text: str) -> None:
        await self.dispatch(TranscriptUpdated(text))

    async def submit_answer(self, transcript: Optional[str] = None) -> None:
        await self.dispatch(TranscriptSubmitted(transcript))

    async def skip(self) -> None:
        await self.dispatch(Skip())

    async def end_early(self) -> None:
        await self.dispatch(EndEarly())

    async def restart(self) -> None:
        await self.dispatch(Restart())

    def teardown(self) -> None:
        """Release camera and speech and drop any in-flight results. Idempotent."""
        self._generation += 1
        self._rollback = None
        self._release_resources()
        logger.info("Session %s torn down", self.session_id)

    def get_metrics(self) -> Dict[str, int]:
        """Get current session metrics."""
        return self.metrics.get_metrics()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set(self, session: Session) -> None:
        previous = self._session
        self._session = session
        if previous.phase != session.phase:
            logger.info("Phase %s -> %s", previous.phase.value, session.phase.value)
            self._emit(PhaseChangedEvent(self.session_id, time.time(), previous.phase, session.phase))

    def _emit(self, event: InterviewEvent) -> None:
        self.event_bus.emit(event)

    def _emit_all(self, events: Sequence[InterviewEvent]) -> None:
        for event in events:
            self._emit(event)

    def _ignore(self, event: SessionEvent, reason: str) -> None:
        logger.info("Ignoring %s: %s (phase=%s, state=%s)", type(event).__name__, reason,
                    self._session.phase.value, self._session.interview_state.value)

    def _fail(self, error: InterviewError, component: str) -> None:
        logger.error("%s failure: %s", component, error)
        self._emit(ErrorOccurredEvent(
            self.session_id, time.time(), type(error).__name__, str(error), component
        ))
        raise error

    def _start_camera(self) -> None:
        try:
            self.camera.start()
        except Exception as e:
            logger.warning("Camera unavailable: %s", e)

    def _start_listening(self) -> None:
        if not self.speech.is_speech_supported:
            logger.info("Speech recognition unsupported; waiting for a typed answer")
            return
        try:
            self.speech.start_listening()
        except Exception as e:
            logger.warning("Could not start speech recognition: %s", e)

    async def _stop_listening(self) -> str:
        if not self.speech.is_speech_supported:
            return ""
        try:
            return await self.speech.stop_listening()
        except Exception as e:
            logger.warning("Could not stop speech recognition cleanly: %s", e)
            return ""

    def _cancel_speech(self) -> None:
        try:
            self.speech.cancel()
        except Exception as e:
            logger.warning("Speech cancel failed: %s", e)

    def _stop_camera(self) -> None:
        try:
            self.camera.stop()
        except Exception as e:
            logger.warning("Camera stop failed: %s", e)

    def _release_resources(self) -> None:
        self._cancel_speech()
        self._stop_camera()

    def _live_transcript(self) -> str:
        spoken = self.speech.transcript if self.speech.is_speech_supported else ""
        return spoken or self._session.transcript

    def _question_context(self, is_follow_up: bool, answer: Optional[str] = None) -> QuestionContext:
        s = self._session
        p = s.personalization
        return QuestionContext(
            question_number=s.question_index,
            total_questions=s.total_questions,
            previous_questions=list(s.asked_questions),
            interview_type=s.interview_type,
            resume_text=p.resume_text if p else None,
            job_description=p.job_description if p else None,
            is_follow_up=is_follow_up,
            previous_question=s.current_question_display if is_follow_up else None,
            previous_answer=answer if is_follow_up else None,
        )

    # ------------------------------------------------------------------
    # Remote calls
    # ------------------------------------------------------------------

    async def _request_question(self, rollback: Session, is_follow_up: bool = False,
                                answer: Optional[str] = None,
                                recorded: Sequence[InterviewEvent] = ()) -> None:
        """
        Fetch the current question (or a follow-up) and hand it to QuestionReady.

        ``recorded`` holds notifications for the turn that was just closed.
        They are emitted only once the next question is in hand, so a failed
        request that rolls the turn back leaves no trace on the bus.
        """
        session = self._session
        if not is_follow_up and session.personalization is not None:
            custom = session.personalization.custom_question_for(session.question_index)
            if custom:
                logger.info("Using custom question %d/%d", session.question_index, session.total_questions)
                self._emit_all(recorded)
                await self.dispatch(QuestionReady(raw_text=custom))
                return

        context = self._question_context(is_follow_up, answer)
        generation = self._generation
        self._rollback = rollback
        try:
            raw = await asyncio.to_thread(self.question_service.generate, context)
        except Exception as e:
            if generation != self._generation:
                logger.info("Dropping question failure from an abandoned session: %s", e)
                return
            if not is_follow_up:
                await self.dispatch(RemoteFailure(service="question", error=e))
                return
            logger.warning("Follow-up generation failed, using fallback: %s", e)
            raw = FALLBACK_FOLLOW_UP

        if generation != self._generation:
            logger.info("Dropping question from an abandoned session")
            return
        self._emit_all(recorded)
        await self.dispatch(QuestionReady(raw_text=raw, is_follow_up=is_follow_up))

    async def _analyze(self, question: str, answer: str) -> Optional[AnswerFeedback]:
        try:
            return await asyncio.to_thread(self.analysis_service.analyze, question, answer)
        except Exception as e:
            logger.warning("Answer analysis failed, continuing unscored: %s", e)
            return None

    async def _advance_or_finish(self, rollback: Session, recorded: Sequence[InterviewEvent]) -> None:
        session = self._session
        if session.is_last_question:
            # Responses survive a failed report, so the turn is final here
            self._emit_all(recorded)
            await self._finalize()
            return
        self._set(transitions.advance(session))
        await self._request_question(rollback, recorded=recorded)

    async def _finalize(self, rollback: Optional[Session] = None) -> None:
        """
        Generate the report and complete the session.

        ``rollback`` is the record restored if the report fails; by default
        the session returns to INTERVIEWING/IDLE with every response kept.
        """
        self._set(transitions.begin_processing(self._session))
        processing = self._session
        self._rollback = rollback or transitions.report_failed(processing)
        generation = self._generation
        logger.info("Generating report over %d responses", len(processing.responses))

        try:
            report = await asyncio.to_thread(
                self.report_service.generate, processing.responses, processing.interview_type
            )
        except Exception as e:
            if generation != self._generation:
                logger.info("Dropping report failure from an abandoned session: %s", e)
                return
            await self.dispatch(RemoteFailure(service="report", error=e))
            return

        if generation != self._generation:
            logger.info("Dropping report from an abandoned session")
            return

        self._rollback = None
        self._set(transitions.complete(processing, report))
        self._stop_camera()

        answered = sum(1 for r in processing.responses if not r.skipped)
        self._emit(SessionCompletedEvent(self.session_id, time.time(), answered, report.overall_score))
        await self._record_progress(report)

    async def _record_progress(self, report: FinalReport) -> None:
        if self.progress_tracker is None:
            return
        try:
            await asyncio.to_thread(
                self.progress_tracker.record,
                report.communication_score,
                report.confidence_score,
                report.technical_score,
                self._session.interview_type,
            )
        except Exception as e:
            logger.error("Failed to record progress: %s", e)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def _on_submit_personalization(self, event: SubmitPersonalization) -> None:
        if self._session.phase != Phase.PERSONALIZING:
            raise InvalidTransitionError(
                f"Personalization can only be submitted before setup, not in {self._session.phase.value}"
            )
        self._set(transitions.submit_personalization(self._session, event.personalization))
        self._start_camera()

    async def _on_start_interview(self, event: StartInterview) -> None:
        snapshot = self._session
        if snapshot.phase != Phase.SETTING_UP:
            raise InvalidTransitionError(f"Cannot start an interview from {snapshot.phase.value}")
        if not self.camera.is_active:
            self._start_camera()
        if not self.camera.is_active:
            self._fail(CameraUnavailableError("Please turn on your camera first"), component="camera")

        self._set(transitions.begin_interview(snapshot))
        await self._request_question(rollback=transitions.rollback_to_setup(snapshot))

    async def _on_question_ready(self, event: QuestionReady) -> None:
        session = self._session
        if session.phase != Phase.INTERVIEWING or session.interview_state != InterviewState.THINKING:
            self._ignore(event, "no question was requested")
            return

        self._rollback = None
        self._set(transitions.question_ready(session, event.raw_text, event.is_follow_up))
        session = self._session
        now = time.time()
        if event.is_follow_up:
            self._emit(FollowUpAskedEvent(
                self.session_id, now, session.question_index, session.follow_up_count,
                session.current_question_display, session.current_emotion.value,
            ))
        else:
            self._emit(QuestionAskedEvent(
                self.session_id, now, session.question_index,
                session.current_question_display, session.current_emotion.value,
            ))
        self._emit(TipAddedEvent(self.session_id, now, session.pro_tips[-1]))

        await self._deliver(session.turn_id, session.current_question_display)

    async def _deliver(self, turn_id: int, text: str) -> None:
        """Speak the question, then report completion for this turn."""
        generation = self._generation
        if self.speaks:
            try:
                await self.speech.speak(text)
            except Exception as e:
                logger.warning("Speech synthesis failed, showing text only: %s", e)
        if generation != self._generation:
            return
        await self.dispatch(SpeechEnded(turn_id=turn_id))

    async def _on_speech_ended(self, event: SpeechEnded) -> None:
        session = self._session
        if (session.phase != Phase.INTERVIEWING
                or session.interview_state != InterviewState.RESPONDING
                or event.turn_id != session.turn_id):
            self._ignore(event, f"stale speech completion for turn {event.turn_id}")
            return
        self._set(transitions.start_listening(session))
        self._start_listening()

    async def _on_transcript_updated(self, event: TranscriptUpdated) -> None:
        session = self._session
        if session.phase != Phase.INTERVIEWING or session.interview_state != InterviewState.LISTENING:
            self._ignore(event, "not listening")
            return
        self._set(transitions.update_transcript(session, event.text))

    async def _on_transcript_submitted(self, event: TranscriptSubmitted) -> None:
        snapshot = self._session
        if snapshot.phase != Phase.INTERVIEWING or snapshot.interview_state != InterviewState.LISTENING:
            self._ignore(event, "not listening")
            return

        candidate = event.transcript if event.transcript is not None else self._live_transcript()
        if not candidate.strip():
            logger.info("No response detected for question %d", snapshot.question_index)
            self._emit(NoResponseDetectedEvent(self.session_id, time.time(), snapshot.question_index))
            return

        generation = self._generation
        self._set(transitions.start_thinking(snapshot))
        final = await self._stop_listening()
        if generation != self._generation:
            return
        answer = candidate.strip()
        if event.transcript is None and final.strip():
            answer = final.strip()

        rollback = transitions.rollback_to_listening(snapshot)
        thinking = self._session

        if needs_follow_up(answer, thinking.follow_up_count):
            logger.info("Answer to question %d needs a follow-up (%d so far)",
                        thinking.question_index, thinking.follow_up_count)
            self._set(transitions.begin_follow_up(thinking))
            await self._request_question(rollback, is_follow_up=True, answer=answer)
            return

        feedback = await self._analyze(thinking.current_question_display, answer)
        if generation != self._generation:
            return

        self._set(transitions.record_response(self._session, answer, feedback))
        now = time.time()
        recorded = [AnswerRecordedEvent(
            self.session_id, now, thinking.question_index,
            thinking.current_question_display, answer, feedback is not None,
        )]
        if feedback is not None:
            recorded.append(FeedbackReadyEvent(
                self.session_id, now, thinking.question_index, feedback.score, feedback.feedback
            ))

        await self._advance_or_finish(rollback, recorded)

    async def _on_skip(self, event: Skip) -> None:
        snapshot = self._session
        if (snapshot.phase != Phase.INTERVIEWING
                or snapshot.interview_state not in (InterviewState.LISTENING, InterviewState.RESPONDING)):
            self._ignore(event, "nothing to skip")
            return

        self._cancel_speech()
        self._set(transitions.record_skip(snapshot))
        skipped = QuestionSkippedEvent(
            self.session_id, time.time(), snapshot.question_index, snapshot.current_question_display
        )
        await self._advance_or_finish(transitions.rollback_to_listening(snapshot), [skipped])

    async def _on_end_early(self, event: EndEarly) -> None:
        session = self._session
        if session.phase != Phase.INTERVIEWING or session.interview_state == InterviewState.THINKING:
            self._ignore(event, "a turn is in flight or the interview is not running")
            return

        self._cancel_speech()
        if session.responses:
            logger.info("Ending early after %d responses", len(session.responses))
            # A failed report returns the user to the unanswered question
            rollback = None
            if session.interview_state != InterviewState.IDLE:
                rollback = transitions.rollback_to_listening(session)
            await self._finalize(rollback)
        else:
            logger.info("Ending early with no responses; back to setup")
            self._rollback = None
            self._set(transitions.back_to_setup(session))

    async def _on_remote_failure(self, event: RemoteFailure) -> None:
        rollback = self._rollback
        if rollback is None:
            self._ignore(event, "no remote call in flight")
            return

        self._rollback = None
        self._set(rollback)
        if rollback.phase == Phase.INTERVIEWING and rollback.interview_state == InterviewState.LISTENING:
            self._start_listening()

        error = event.error
        if not isinstance(error, RemoteServiceError):
            error_cls = ReportGenerationError if event.service == "report" else QuestionGenerationError
            wrapped = error_cls(str(error) or type(error).__name__)
            wrapped.__cause__ = error
            error = wrapped
        self._fail(error, component=event.service)

    async def _on_restart(self, event: Restart) -> None:
        self._generation += 1
        self._rollback = None
        self._release_resources()
        self._set(transitions.restart(self._session))
        logger.info("Session %s restarted", self.session_id)


def create_orchestrator(config: Config,
                        speech: SpeechIOController,
                        camera: CameraController,
                        event_bus: Optional[InterviewEventBus] = None) -> SessionOrchestrator:
    """Wire remote services and progress tracking from configuration."""
    question_service, analysis_service, report_service = build_remote_services(config)
    return SessionOrchestrator(
        question_service=question_service,
        analysis_service=analysis_service,
        report_service=report_service,
        speech=speech,
        camera=camera,
        progress_tracker=JsonProgressStore(config.progress_file),
        total_questions=config.total_questions,
        interview_type=config.interview_type,
        enable_tts=config.enable_tts,
        event_bus=event_bus,
    )
