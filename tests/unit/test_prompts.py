import pytest

from mockinterview.config import JOB_DESCRIPTION_PROMPT_CHARS, RESUME_PROMPT_CHARS
from mockinterview.interview.models import QuestionContext, ResponseRecord
from mockinterview.interview.prompts import InterviewPrompts, PromptFormatter, interview_stage


@pytest.mark.parametrize("number,total,stage", [
    (1, 5, "greeting"),
    (2, 5, "behavioral"),
    (3, 5, "technical"),
    (4, 5, "technical"),
    (5, 5, "closing"),
    (1, 1, "greeting"),
    (2, 10, "behavioral"),
    (9, 10, "closing"),
])
def test_interview_stage(number, total, stage):
    assert interview_stage(number, total) == stage


def test_question_request_truncates_personalization():
    context = QuestionContext(
        question_number=2, total_questions=5, previous_questions=["Intro?", "Challenge?"],
        interview_type="technical", resume_text="r" * 5000, job_description="j" * 5000,
    )
    prompt = InterviewPrompts.question_request(context, "behavioral")

    assert "r" * RESUME_PROMPT_CHARS in prompt
    assert "r" * (RESUME_PROMPT_CHARS + 1) not in prompt
    assert "j" * JOB_DESCRIPTION_PROMPT_CHARS in prompt
    assert "j" * (JOB_DESCRIPTION_PROMPT_CHARS + 1) not in prompt
    assert "- Intro?\n- Challenge?" in prompt


def test_follow_up_request_includes_previous_turn():
    context = QuestionContext(
        question_number=2, total_questions=5, previous_questions=["Intro?"],
        interview_type="behavioral", is_follow_up=True,
        previous_question="Tell me about a challenge.", previous_answer="It was hard.",
    )
    prompt = InterviewPrompts.question_request(context, "behavioral")

    assert "Previous question: Tell me about a challenge." in prompt
    assert "Candidate's answer: It was hard." in prompt


def test_persona_lists_stage_directions():
    context = QuestionContext(question_number=1, total_questions=5, previous_questions=[],
                              interview_type="behavioral")
    persona = InterviewPrompts.interviewer_persona(context, "greeting")
    assert "[warm smile]" in persona
    assert "GREETING" in persona


def test_format_responses():
    text = PromptFormatter.format_responses([ResponseRecord("Q?", "A."), ResponseRecord("R?", "B.")])
    assert text == "Q1: Q?\nA: A.\n\nQ2: R?\nA: B."
