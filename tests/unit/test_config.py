import pytest

from mockinterview.config import TOTAL_QUESTIONS, Config, get_config


def test_default_project_placeholder_is_rejected(clean_env):
    with pytest.raises(ValueError, match="GOOGLE_CLOUD_PROJECT"):
        get_config()


def test_environment_overrides(clean_env):
    clean_env.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
    clean_env.setenv("MOCKINTERVIEW_TOTAL_QUESTIONS", "7")
    clean_env.setenv("MOCKINTERVIEW_INTERVIEW_TYPE", "technical")
    clean_env.setenv("MOCKINTERVIEW_ENABLE_TTS", "false")

    config = get_config()

    assert config.google_cloud_project == "my-project"
    assert config.total_questions == 7
    assert config.interview_type == "technical"
    assert config.enable_tts is False


def test_defaults(clean_env):
    clean_env.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
    config = get_config()
    assert config.backend == "vertex"
    assert config.total_questions == TOTAL_QUESTIONS
    assert config.enable_tts is True


def test_edge_backend_needs_url(clean_env):
    clean_env.setenv("MOCKINTERVIEW_BACKEND", "edge")
    with pytest.raises(ValueError, match="EDGE_FUNCTION_URL"):
        get_config()

    clean_env.setenv("EDGE_FUNCTION_URL", "https://example.test/functions/v1/ai-interview")
    assert get_config().backend == "edge"


def test_non_integer_question_count(clean_env):
    clean_env.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
    clean_env.setenv("MOCKINTERVIEW_TOTAL_QUESTIONS", "many")
    with pytest.raises(ValueError, match="integer"):
        get_config()


@pytest.mark.parametrize("overrides", [
    {"total_questions": 0},
    {"interview_type": "trivia"},
    {"backend": "local"},
])
def test_validate_rejects(overrides):
    config = Config(google_cloud_project="my-project", **overrides)
    with pytest.raises(ValueError):
        config.validate()
