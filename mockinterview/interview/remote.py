"""
Remote question, analysis and report services.

Two backends implement the contracts in ``services.py``: Vertex AI directly
(prompts built locally) and the hosted ai-interview function (prompts built
server-side). Both translate their transport errors into RemoteServiceError.
"""
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config import Config
from ..infrastructure.llm import (
    EdgeFunctionClient, EdgeFunctionError, LLMRequestError, VertexRestClient,
)
from .errors import QuestionGenerationError, ReportGenerationError
from .models import AnswerFeedback, FinalReport, QuestionContext, ResponseRecord
from .prompts import InterviewPrompts, interview_stage
from .schemas import feedback_to_payload, parse_feedback, parse_report
from .services import RemoteAnalysisService, RemoteQuestionService, RemoteReportService

logger = logging.getLogger("remote")


def _clean_question(text: str) -> str:
    return (text or "").strip().strip('"').strip()


# =============================================================================
# VERTEX BACKEND
# =============================================================================

class VertexQuestionService:
    """Question generation with a stage-aware interviewer persona."""

    def __init__(self, llm_client: VertexRestClient, temperature: float = 0.7):
        self.llm_client = llm_client
        self.temperature = temperature

    def generate(self, context: QuestionContext) -> str:
        stage = interview_stage(context.question_number, context.total_questions)
        system_prompt = InterviewPrompts.interviewer_persona(context, stage)
        user_prompt = InterviewPrompts.question_request(context, stage)
        logger.info("Generating question %d/%d (stage=%s, follow_up=%s)",
                    context.question_number, context.total_questions, stage, context.is_follow_up)
        try:
            text = self.llm_client.generate_content(
                user_prompt, system_instruction=system_prompt, temperature=self.temperature
            )
        except LLMRequestError as e:
            raise QuestionGenerationError(str(e), status_code=e.status_code) from e

        question = _clean_question(text)
        if not question:
            raise QuestionGenerationError("LLM returned an empty question")
        return question


class VertexAnalysisService:
    """Per-answer scoring. Failures yield None."""

    def __init__(self, llm_client: VertexRestClient):
        self.llm_client = llm_client

    def analyze(self, question: str, answer: str) -> Optional[AnswerFeedback]:
        try:
            payload = self.llm_client.generate_json(InterviewPrompts.analysis_prompt(question, answer))
        except (LLMRequestError, ValueError) as e:
            logger.warning("Answer analysis failed: %s", e)
            return None
        feedback = parse_feedback(payload)
        if feedback is None:
            logger.warning("Answer analysis returned an unusable payload: %s", payload)
        return feedback


class VertexReportService:
    """End-of-interview report generation."""

    def __init__(self, llm_client: VertexRestClient):
        self.llm_client = llm_client

    def generate(self, responses: Sequence[ResponseRecord], interview_type: str) -> FinalReport:
        prompt = InterviewPrompts.report_prompt(responses, interview_type)
        try:
            payload = self.llm_client.generate_json(prompt)
            return parse_report(payload)
        except LLMRequestError as e:
            raise ReportGenerationError(str(e), status_code=e.status_code) from e
        except ValueError as e:
            raise ReportGenerationError(f"Unusable report: {e}") from e


# =============================================================================
# EDGE FUNCTION BACKEND
# =============================================================================

class EdgeQuestionService:
    """Question generation through the hosted function."""

    def __init__(self, client: EdgeFunctionClient):
        self.client = client

    def generate(self, context: QuestionContext) -> str:
        request_context: Dict[str, Any] = {
            "questionNumber": context.question_number,
            "totalQuestions": context.total_questions,
            "previousQuestions": list(context.previous_questions),
            "interviewType": context.interview_type,
            "resumeText": context.resume_text,
            "jobDescription": context.job_description,
            "isFollowUp": context.is_follow_up,
            "previousQuestion": context.previous_question,
            "previousAnswer": context.previous_answer,
        }
        request_context = {k: v for k, v in request_context.items() if v is not None}
        try:
            data = self.client.invoke("generate_question", context=request_context)
        except EdgeFunctionError as e:
            raise QuestionGenerationError(str(e), status_code=e.status_code) from e

        question = _clean_question(str(data.get("content") or ""))
        if not question:
            raise QuestionGenerationError("ai-interview returned an empty question")
        return question


class EdgeAnalysisService:
    """Per-answer scoring through the hosted function. Failures yield None."""

    def __init__(self, client: EdgeFunctionClient):
        self.client = client

    def analyze(self, question: str, answer: str) -> Optional[AnswerFeedback]:
        try:
            data = self.client.invoke("analyze_response", question=question, userResponse=answer)
        except EdgeFunctionError as e:
            logger.warning("Answer analysis failed: %s", e)
            return None
        return parse_feedback(data)


class EdgeReportService:
    """Report generation through the hosted function."""

    def __init__(self, client: EdgeFunctionClient):
        self.client = client

    def generate(self, responses: Sequence[ResponseRecord], interview_type: str) -> FinalReport:
        all_responses = []
        for record in responses:
            item: Dict[str, Any] = {"question": record.question, "answer": record.answer}
            feedback = feedback_to_payload(record.feedback)
            if feedback is not None:
                item["feedback"] = feedback
            all_responses.append(item)

        try:
            data = self.client.invoke(
                "generate_feedback", allResponses=all_responses, interviewType=interview_type
            )
            return parse_report(data)
        except EdgeFunctionError as e:
            raise ReportGenerationError(str(e), status_code=e.status_code) from e
        except ValueError as e:
            raise ReportGenerationError(f"Unusable report: {e}") from e


def build_remote_services(config: Config) -> Tuple[RemoteQuestionService, RemoteAnalysisService, RemoteReportService]:
    """Create the three remote services for the configured backend."""
    if config.backend == "edge":
        client = EdgeFunctionClient(config.edge_function_url, config.edge_function_token)
        logger.info("Using ai-interview function at %s", config.edge_function_url)
        return EdgeQuestionService(client), EdgeAnalysisService(client), EdgeReportService(client)

    llm = VertexRestClient(
        project=config.google_cloud_project,
        location=config.vertex_location,
        model=config.model_name,
        credentials_json=config.google_application_credentials,
        timeout=config.llm_timeout,
    )
    logger.info("Using Vertex model %s in %s", config.model_name, config.vertex_location)
    return VertexQuestionService(llm), VertexAnalysisService(llm), VertexReportService(llm)
