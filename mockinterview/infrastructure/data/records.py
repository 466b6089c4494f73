"""
Progress data structures.
Handles per-session score records and the running practice summary.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SessionRecord:
    """Scores of a single completed interview session."""
    interview_type: str
    communication_score: float
    confidence_score: float
    technical_score: float
    overall_score: int  # Weighted, rounded
    completed_at: str  # ISO format timestamp


@dataclass
class ProgressSummary:
    """Running averages across all completed sessions."""
    total_interviews: int = 0
    communication_score: int = 0
    confidence_score: int = 0
    technical_score: int = 0
    overall_score: int = 0
    practice_streak: int = 0  # Consecutive days with at least one session
    last_practice_date: Optional[str] = None  # ISO date


@dataclass
class ProgressFile:
    """On-disk layout of the progress store."""
    summary: ProgressSummary = field(default_factory=ProgressSummary)
    sessions: List[SessionRecord] = field(default_factory=list)
