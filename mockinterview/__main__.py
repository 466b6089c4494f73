#!/usr/bin/env python3
"""
Main entry point for the mock interview system.
Allows running the package with: python -m mockinterview
"""
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Config, get_config
from .infrastructure.media import HeadlessCamera
from .infrastructure.speech import TextSpeechController
from .interview import (
    EventType, FinalReport, InterviewError, InterviewEvent, InterviewState, Personalization,
    Phase, SessionOrchestrator, create_orchestrator,
)
from .utils import setup_logging

logger = logging.getLogger("cli")

USAGE = (
    "Usage: python -m mockinterview [--questions=N] [--type=behavioral|technical|coding] "
    "[--resume=PATH] [--jd=PATH] [--custom=PATH] [--text]"
)


def _read_file(path: str, what: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        print(f"❌ Could not read {what} file '{path}': {e}")
        sys.exit(1)


def _parse_args(argv: List[str], config: Config):
    """Apply command-line flags to the config and build the personalization."""
    resume_text = None
    job_description = None
    custom_questions = ()
    text_only = False

    for arg in argv:
        if arg.startswith("--questions="):
            try:
                config.total_questions = int(arg.split("=", 1)[1])
            except ValueError:
                print("❌ Invalid question count. Use --questions=N with N >= 1")
                sys.exit(1)
        elif arg.startswith("--type="):
            config.interview_type = arg.split("=", 1)[1].strip().lower()
        elif arg.startswith("--resume="):
            resume_text = _read_file(arg.split("=", 1)[1], "resume")
        elif arg.startswith("--jd="):
            job_description = _read_file(arg.split("=", 1)[1], "job description")
        elif arg.startswith("--custom="):
            lines = _read_file(arg.split("=", 1)[1], "custom questions").splitlines()
            custom_questions = tuple(line.strip() for line in lines if line.strip())
        elif arg in ("--text", "--no-tts"):
            text_only = True
        elif arg in ("-h", "--help"):
            print(USAGE)
            sys.exit(0)
        else:
            print(f"❌ Unknown option: {arg}")
            print(USAGE)
            sys.exit(1)

    personalization = None
    if resume_text or job_description or custom_questions:
        personalization = Personalization(
            resume_text=resume_text,
            job_description=job_description,
            custom_questions=custom_questions,
        )
    return personalization, text_only


def _attach_console(orchestrator: SessionOrchestrator) -> None:
    """Print interview notifications as they happen."""

    def on_event(event: InterviewEvent) -> None:
        data = event.data
        if event.event_type in (EventType.QUESTION_ASKED, EventType.FOLLOW_UP_ASKED):
            if not orchestrator.speaks:
                label = "Follow-up" if event.event_type == EventType.FOLLOW_UP_ASKED else (
                    f"Question {data['question_index']}/{orchestrator.session.total_questions}"
                )
                print(f"\n❓ {label}: {data['question']}")
        elif event.event_type == EventType.TIP_ADDED:
            print(f"💡 {data['tip']}")
        elif event.event_type == EventType.FEEDBACK_READY:
            print(f"📝 Feedback ({data['score']:.0f}/100): {data['feedback']}")
        elif event.event_type == EventType.QUESTION_SKIPPED:
            print("⏭️  Skipped")
        elif event.event_type == EventType.NO_RESPONSE_DETECTED:
            print(f"⚠️  {data['message']}")
        elif event.event_type == EventType.ERROR_OCCURRED:
            print(f"❌ {data['error_message']}")
        elif event.event_type == EventType.PHASE_CHANGED and data["current"] == Phase.PROCESSING.value:
            print("\n🤔 Generating your report...")

    orchestrator.event_bus.subscribe_all(on_event)


def _display_report(report: FinalReport, orchestrator: SessionOrchestrator, log_file: str) -> None:
    """Display the final interview report."""
    print("\n" + "=" * 50)
    print("🎯 INTERVIEW COMPLETE")
    print("=" * 50)
    print(f"🔢 Overall Score: {report.overall_score:.0f}/100")
    print(f"🗣️  Communication: {report.communication_score:.0f}  "
          f"💪 Confidence: {report.confidence_score:.0f}  "
          f"🛠️  Technical: {report.technical_score:.0f}")
    print(f"📝 {report.summary}")
    for title, items in (("Strengths", report.strengths),
                         ("Improvements", report.improvements),
                         ("Recommendations", report.recommendations)):
        if items:
            print(f"\n{title}:")
            for item in items:
                print(f"  • {item}")
    print(f"\n📁 Full details logged to: {log_file}")
    print(f"📈 Session metrics: {orchestrator.get_metrics()}")


async def _read_line(prompt: str) -> Optional[str]:
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


async def run_session(config: Config, personalization: Optional[Personalization],
                      text_only: bool = False) -> int:
    """Run one interview in the terminal. Returns the process exit code."""
    if text_only:
        config.enable_tts = False
    speech = TextSpeechController()
    camera = HeadlessCamera()
    orchestrator = create_orchestrator(config, speech, camera)
    _attach_console(orchestrator)

    print(f"\n🎙️  Starting {config.interview_type} interview - {config.total_questions} questions")
    print("   Type your answer and press Enter. Commands: /skip /end /restart /quit")
    print("=" * 50)

    try:
        await orchestrator.submit_personalization(personalization)
        while orchestrator.session.phase != Phase.COMPLETE:
            session = orchestrator.session
            try:
                if session.phase == Phase.SETTING_UP:
                    line = await _read_line("\n▶️  Press Enter to start (/quit to exit) ")
                    if line is None or line.strip() == "/quit":
                        return 0
                    await orchestrator.start_interview()
                    continue

                if session.interview_state == InterviewState.IDLE:
                    print("⚠️  The report could not be generated. Type /end to retry.")

                line = await _read_line("🎤 > ")
                command = "/quit" if line is None else line.strip()
                if command == "/quit":
                    return 0
                elif command == "/skip":
                    await orchestrator.skip()
                elif command == "/end":
                    await orchestrator.end_early()
                elif command == "/restart":
                    await orchestrator.restart()
                    await orchestrator.submit_personalization(personalization)
                else:
                    speech.feed(command)
                    await orchestrator.submit_answer()
            except InterviewError as e:
                logger.info("Recovered from %s: %s", type(e).__name__, e)

        _display_report(orchestrator.session.final_report, orchestrator, config.log_file)
        return 0
    finally:
        orchestrator.teardown()


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line interface for the mock interview orchestrator."""
    argv = sys.argv[1:] if argv is None else argv

    # Load configuration from environment
    try:
        config = get_config()
        personalization, text_only = _parse_args(argv, config)
        config.validate()
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        sys.exit(1)

    setup_logging(config.log_file, config.log_level)

    if text_only:
        print("📝 Text Mode: Questions will be displayed as text only")
    else:
        print("🔊 Questions are delivered through the speech channel")
        print("   (Use --text or --no-tts to disable speech)")

    try:
        exit_code = asyncio.run(run_session(config, personalization, text_only))
    except KeyboardInterrupt:
        print("\n👋 Interview cancelled")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
