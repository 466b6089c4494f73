"""
Mock Interview Configuration System
===================================

This file contains ALL configuration for the mock interview orchestrator.
- User settings at the top (things users might want to change)
- Internal constants at the bottom (technical defaults)
"""
import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# USER SETTINGS - Edit these to customize the interview
# =============================================================================

# Interview settings
TOTAL_QUESTIONS = 5
INTERVIEW_TYPE = "behavioral"  # Options: behavioral, technical, coding

# Backend used for question generation, answer analysis and reports
BACKEND = "vertex"  # Options: vertex, edge

# Vertex backend: set your Google Cloud project
GOOGLE_CLOUD_PROJECT = "your-project-id"  # Change this!
GOOGLE_APPLICATION_CREDENTIALS = None  # Optional: path to credentials JSON

# Edge backend: hosted ai-interview function
EDGE_FUNCTION_URL = None
EDGE_FUNCTION_TOKEN = None

# Speech settings
ENABLE_TTS = True
LANGUAGE_CODE = "en-US"

# Progress tracking
PROGRESS_FILE = "./_progress/progress.json"

# Logging
LOG_FILE = "./_sessions/interview.log"
LOG_LEVEL = "INFO"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

INTERVIEW_TYPES = ("behavioral", "technical", "coding")
BACKENDS = ("vertex", "edge")

# Turn sequencing
MAX_FOLLOW_UPS = 2
FOLLOW_UP_MIN_WORDS = 20
SKIPPED_ANSWER = "[Skipped]"
FALLBACK_FOLLOW_UP = (
    "That's a good start. Could you elaborate a bit more, "
    "maybe with a specific example from your experience?"
)
ELABORATE_TIP = (
    "Follow-up: Try to elaborate. Add a concrete example, what you did "
    "personally, and the measurable result."
)

# Prompt limits
RESUME_PROMPT_CHARS = 3000
JOB_DESCRIPTION_PROMPT_CHARS = 2000

# Interview stage thresholds (fraction of questions asked)
BEHAVIORAL_STAGE_LIMIT = 0.4
TECHNICAL_STAGE_LIMIT = 0.8

# LLM
VERTEX_LOCATION = "us-central1"
MODEL_NAME = "gemini-2.5-flash"
LLM_TIMEOUT = 60
MAX_OUTPUT_TOKENS = 1024
EDGE_FUNCTION_TIMEOUT = 60

# Progress score weights
COMMUNICATION_WEIGHT = 0.3
CONFIDENCE_WEIGHT = 0.3
TECHNICAL_WEIGHT = 0.4


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class Config:
    """Main configuration object."""
    backend: str = BACKEND
    google_cloud_project: Optional[str] = None
    google_application_credentials: Optional[str] = None
    edge_function_url: Optional[str] = None
    edge_function_token: Optional[str] = None
    total_questions: int = TOTAL_QUESTIONS
    interview_type: str = INTERVIEW_TYPE
    enable_tts: bool = ENABLE_TTS
    language_code: str = LANGUAGE_CODE
    progress_file: str = PROGRESS_FILE
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL
    vertex_location: str = VERTEX_LOCATION
    model_name: str = MODEL_NAME
    llm_timeout: int = LLM_TIMEOUT

    def validate(self) -> None:
        """Raise ValueError when the configuration cannot run an interview."""
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{self.backend}'. Use one of: {', '.join(BACKENDS)}")
        if self.interview_type not in INTERVIEW_TYPES:
            raise ValueError(
                f"Unknown interview type '{self.interview_type}'. "
                f"Use one of: {', '.join(INTERVIEW_TYPES)}"
            )
        if self.total_questions < 1:
            raise ValueError("TOTAL_QUESTIONS must be at least 1")
        if self.backend == "vertex":
            if not self.google_cloud_project or self.google_cloud_project == "your-project-id":
                raise ValueError("Please set GOOGLE_CLOUD_PROJECT in config.py or as environment variable")
        elif not self.edge_function_url:
            raise ValueError("Please set EDGE_FUNCTION_URL in config.py or as environment variable")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Config:
    """Load configuration, letting environment variables override file settings."""
    total = os.getenv("MOCKINTERVIEW_TOTAL_QUESTIONS")
    try:
        total_questions = int(total) if total else TOTAL_QUESTIONS
    except ValueError:
        raise ValueError(f"MOCKINTERVIEW_TOTAL_QUESTIONS must be an integer, got '{total}'")

    config = Config(
        backend=os.getenv("MOCKINTERVIEW_BACKEND") or BACKEND,
        google_cloud_project=os.getenv("GOOGLE_CLOUD_PROJECT") or GOOGLE_CLOUD_PROJECT,
        google_application_credentials=(
            os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or GOOGLE_APPLICATION_CREDENTIALS
        ),
        edge_function_url=os.getenv("EDGE_FUNCTION_URL") or EDGE_FUNCTION_URL,
        edge_function_token=os.getenv("EDGE_FUNCTION_TOKEN") or EDGE_FUNCTION_TOKEN,
        total_questions=total_questions,
        interview_type=os.getenv("MOCKINTERVIEW_INTERVIEW_TYPE") or INTERVIEW_TYPE,
        enable_tts=_env_flag("MOCKINTERVIEW_ENABLE_TTS", ENABLE_TTS),
        progress_file=os.getenv("MOCKINTERVIEW_PROGRESS_FILE") or PROGRESS_FILE,
        log_file=os.getenv("MOCKINTERVIEW_LOG_FILE") or LOG_FILE,
        log_level=os.getenv("MOCKINTERVIEW_LOG_LEVEL") or LOG_LEVEL,
    )
    config.validate()
    return config
