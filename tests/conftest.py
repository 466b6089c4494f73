import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mockinterview.interview.testing import create_mock_orchestrator

CONFIG_ENV_VARS = (
    "MOCKINTERVIEW_BACKEND",
    "MOCKINTERVIEW_TOTAL_QUESTIONS",
    "MOCKINTERVIEW_INTERVIEW_TYPE",
    "MOCKINTERVIEW_ENABLE_TTS",
    "MOCKINTERVIEW_PROGRESS_FILE",
    "MOCKINTERVIEW_LOG_FILE",
    "MOCKINTERVIEW_LOG_LEVEL",
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "EDGE_FUNCTION_URL",
    "EDGE_FUNCTION_TOKEN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_setup():
    return create_mock_orchestrator()


@pytest.fixture
def make_setup():
    return create_mock_orchestrator
