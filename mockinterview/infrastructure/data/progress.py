"""
JSON-file progress tracking across interview sessions.
"""
import json
import logging
import math
import os
import tempfile
from dataclasses import asdict
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ...config import COMMUNICATION_WEIGHT, CONFIDENCE_WEIGHT, TECHNICAL_WEIGHT, PROGRESS_FILE
from .records import ProgressFile, ProgressSummary, SessionRecord

logger = logging.getLogger("progress")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_overall(communication: float, confidence: float, technical: float) -> int:
    """Overall score: 30% communication, 30% confidence, 40% technical."""
    return round_half_up(
        COMMUNICATION_WEIGHT * communication
        + CONFIDENCE_WEIGHT * confidence
        + TECHNICAL_WEIGHT * technical
    )


def next_streak(previous_streak: int, last_practice: Optional[date], today: date) -> int:
    """Same day keeps the streak, the next day extends it, any gap restarts it."""
    if last_practice == today:
        return previous_streak or 1
    if last_practice == today - timedelta(days=1):
        return previous_streak + 1
    return 1


class JsonProgressStore:
    """
    Stores session scores and a running summary in one JSON file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str = PROGRESS_FILE, clock: Callable[[], datetime] = datetime.now):
        self.path = path
        self.clock = clock

    def load(self) -> ProgressFile:
        """Load the store, or an empty one if the file does not exist yet."""
        if not os.path.exists(self.path):
            return ProgressFile()
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return ProgressFile(
            summary=ProgressSummary(**data.get("summary", {})),
            sessions=[SessionRecord(**item) for item in data.get("sessions", [])],
        )

    def _save(self, progress: ProgressFile) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".progress-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(asdict(progress), f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def record(self, communication_score: float, confidence_score: float,
               technical_score: float, interview_type: str) -> SessionRecord:
        """Append one completed session and update the running summary."""
        now = self.clock()
        progress = self.load()
        summary = progress.summary

        session = SessionRecord(
            interview_type=interview_type,
            communication_score=communication_score,
            confidence_score=confidence_score,
            technical_score=technical_score,
            overall_score=weighted_overall(communication_score, confidence_score, technical_score),
            completed_at=now.isoformat(),
        )

        count = summary.total_interviews + 1

        def running(current: float, new: float) -> int:
            return round_half_up((current * summary.total_interviews + new) / count)

        communication = running(summary.communication_score, communication_score)
        confidence = running(summary.confidence_score, confidence_score)
        technical = running(summary.technical_score, technical_score)

        last = date.fromisoformat(summary.last_practice_date) if summary.last_practice_date else None
        today = now.date()

        progress.summary = ProgressSummary(
            total_interviews=count,
            communication_score=communication,
            confidence_score=confidence,
            technical_score=technical,
            overall_score=weighted_overall(communication, confidence, technical),
            practice_streak=next_streak(summary.practice_streak, last, today),
            last_practice_date=today.isoformat(),
        )
        progress.sessions.append(session)
        self._save(progress)

        logger.info("Recorded %s session (overall %d, streak %d)",
                    interview_type, session.overall_score, progress.summary.practice_streak)
        return session
