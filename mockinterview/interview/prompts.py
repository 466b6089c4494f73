"""
Interview prompt templates and generation.

This module contains all the prompt templates used throughout the interview system,
keeping them separate from the business logic for easier maintenance and editing.
"""
import json
from typing import List, Optional, Sequence

from ..config import (
    BEHAVIORAL_STAGE_LIMIT, JOB_DESCRIPTION_PROMPT_CHARS, RESUME_PROMPT_CHARS,
    TECHNICAL_STAGE_LIMIT,
)
from .emotion import EMOTION_TAGS
from .models import QuestionContext, ResponseRecord

INTERVIEWER_NAME = "Alex Chen"


def interview_stage(question_number: int, total_questions: int) -> str:
    """Return greeting, behavioral, technical or closing for a question position."""
    if question_number <= 1:
        return "greeting"
    progress = question_number / total_questions
    if progress <= BEHAVIORAL_STAGE_LIMIT:
        return "behavioral"
    if progress <= TECHNICAL_STAGE_LIMIT:
        return "technical"
    return "closing"


class InterviewPrompts:
    """Collection of all interview-related prompts."""

    STAGE_INSTRUCTIONS = {
        "greeting": """
STAGE 1: GREETING & INTRODUCTION
- Start with warmth, introduce yourself and set expectations for the conversation.
- Icebreaker: ask the candidate what brought them to where they are today.
        """.strip(),
        "behavioral": """
STAGE 2: CORE COMPETENCY & BEHAVIORAL QUESTIONS
- Bridge from what the candidate just shared before asking.
- Ask STAR-method questions about obstacles, teamwork, leadership, conflict or motivation.
        """.strip(),
        "technical": """
STAGE 3: TECHNICAL / ROLE-SPECIFIC QUESTIONS
- Shift gears naturally toward the technical side of their experience.
- Ask about system design, technical problem-solving, domain knowledge or trade-offs.
        """.strip(),
        "closing": """
STAGE 4: WRAP-UP AND CLOSING
- Signal that you have covered a lot of ground and thank the candidate.
- Offer them the chance to ask questions about the role or the team.
        """.strip(),
    }

    @staticmethod
    def interviewer_persona(context: QuestionContext, stage: str) -> str:
        """System prompt describing the interviewer and the current stage."""
        tags = "\n".join(f"   - [{tag}]" for tag in EMOTION_TAGS)
        return f"""
ROLE: You are "{INTERVIEWER_NAME}," a Senior Hiring Lead who sounds like a real human interviewer.

CORE BEHAVIORS:
1. Use natural active listening cues ("Got it," "Interesting," "I see").
2. Bridge to each new question by referencing something the candidate just said.
3. Include stage-direction tags in brackets to drive the avatar. Only these tags exist:
{tags}
4. If the candidate seems nervous or vague, be gently encouraging.

INTERVIEW STRUCTURE:
You are conducting a {context.interview_type} interview with {context.total_questions} questions total.
Current question: {context.question_number} of {context.total_questions}
Current stage: {stage.upper()}

{InterviewPrompts.STAGE_INSTRUCTIONS[stage]}

OUTPUT FORMAT:
- Include the stage-direction tags in your response
- Ask exactly one question
- Keep it conversational, focused and warm
        """.strip()

    @staticmethod
    def question_request(context: QuestionContext, stage: str) -> str:
        """User prompt asking for the next question or follow-up."""
        parts: List[str] = []
        if context.resume_text:
            parts.append(f"CANDIDATE'S RESUME:\n{context.resume_text[:RESUME_PROMPT_CHARS]}")
        if context.job_description:
            parts.append(
                f"TARGET JOB DESCRIPTION:\n{context.job_description[:JOB_DESCRIPTION_PROMPT_CHARS]}"
            )

        previous = "\n- ".join(context.previous_questions) if context.previous_questions else "None yet"

        if context.is_follow_up:
            parts.append(f"""
The candidate's last answer was too short or vague. Ask ONE follow-up that helps them elaborate
on the same topic, ideally asking for a concrete example. Do not move on to a new topic.
Previous question: {context.previous_question or ""}
Candidate's answer: {context.previous_answer or ""}
Questions already asked (do not repeat any of them):
- {previous}
            """.strip())
        else:
            parts.append(f"""
Generate the next interviewer statement/question.
Question number: {context.question_number} of {context.total_questions}
Interview stage: {stage}
Previous questions/statements (do not repeat any of them):
- {previous}
Interview type: {context.interview_type}

Remember to stay in character as {INTERVIEWER_NAME} and follow the stage-appropriate guidelines.
            """.strip())

        return "\n\n---\n\n".join(parts)

    @staticmethod
    def analysis_prompt(question: str, answer: str) -> str:
        """Prompt for scoring one answer."""
        return f"""
You are an expert interview coach analyzing candidate responses.
Provide instant, constructive feedback that is encouraging but honest.
Focus on: communication clarity, confidence indicators, content quality, and areas for improvement.
Keep feedback concise (2-3 sentences) and actionable.

Question: {json.dumps(question, ensure_ascii=False)}
Candidate's response: {json.dumps(answer, ensure_ascii=False)}

Respond in JSON format: {{"score": <number 0-100>, "feedback": "<brief feedback>", "strengths": ["..."], "improvements": ["..."]}}
        """.strip()

    @staticmethod
    def report_prompt(responses: Sequence[ResponseRecord], interview_type: Optional[str] = None) -> str:
        """Prompt for the final performance report."""
        responses_text = PromptFormatter.format_responses(responses)
        kind = f"{interview_type} " if interview_type else ""
        return f"""
You are an expert interview coach generating a comprehensive performance report for a {kind}interview.
Analyze all responses and provide detailed, actionable feedback.
Be encouraging while being constructive about areas for improvement.
Skipped questions are marked [Skipped] and count against completeness.

Interview responses:
{responses_text}

Respond in JSON format: {{
  "overallScore": <number 0-100>,
  "communicationScore": <number 0-100>,
  "confidenceScore": <number 0-100>,
  "technicalScore": <number 0-100>,
  "summary": "<2-3 sentence summary>",
  "strengths": ["..."],
  "improvements": ["..."],
  "recommendations": ["..."]
}}
        """.strip()


class PromptFormatter:
    """Helper class for formatting prompt sections."""

    @staticmethod
    def format_responses(responses: Sequence[ResponseRecord]) -> str:
        """Render responses as numbered Q/A pairs."""
        return "\n\n".join(
            f"Q{i}: {record.question}\nA: {record.answer}"
            for i, record in enumerate(responses, 1)
        )

    @staticmethod
    def combine(system_prompt: str, user_prompt: str) -> str:
        """Fold a system and user prompt into one text prompt for single-turn models."""
        return f"{system_prompt}\n\n{user_prompt}"
