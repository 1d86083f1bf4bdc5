"""
Feedback Client
Asks Gemini for a score and summary, falling back to the rule-based scorer
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Union

import google.generativeai as genai

from assignment_eval.core.config import settings
from assignment_eval.schemas.feedback import FeedbackResult
from assignment_eval.services.feedback_fallback import generate_fallback_feedback

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Evaluation complete."
DEFAULT_SCORE = 50

PROMPT_TEMPLATE = """You are an academic evaluator. Evaluate the following student submission against the assignment description.

Assignment Description:
{assignment_description}

Student Submission:
{content}

Provide your evaluation in the following JSON format (no markdown, just raw JSON):
{{
  "feedback_summary": "A detailed 2-4 sentence feedback covering relevance, quality, and areas for improvement.",
  "score": <integer from 0 to 100>
}}"""

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```\s*$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# Global model cache
_model_instance = None


class EvaluatorResponseError(ValueError):
    """Gemini answered, but not with the expected JSON object."""


@dataclass(frozen=True)
class _EvaluatorOk:
    result: FeedbackResult


@dataclass(frozen=True)
class _EvaluatorFallback:
    reason: str


_EvaluatorOutcome = Union[_EvaluatorOk, _EvaluatorFallback]


def reload_model():
    """Configure the Gemini client and build a fresh model handle."""
    global _model_instance

    genai.configure(api_key=settings.GEMINI_API_KEY)
    _model_instance = genai.GenerativeModel(settings.GEMINI_MODEL_NAME)
    logger.info(f"Gemini evaluator ready (model={settings.GEMINI_MODEL_NAME})")
    return _model_instance


def _get_model():
    global _model_instance

    if _model_instance is None:
        _model_instance = reload_model()

    return _model_instance


def build_prompt(content: str, assignment_description: str) -> str:
    return PROMPT_TEMPLATE.format(
        assignment_description=assignment_description or "",
        content=content or "",
    )


def strip_code_fences(text: str) -> str:
    text = text.strip()
    text = _FENCE_OPEN_RE.sub("", text)
    text = _FENCE_CLOSE_RE.sub("", text)
    return text.strip()


def _coerce_score(value: Any) -> int:
    """Integer part of the score, 50 if it cannot be read, clamped to [0, 100]."""
    if isinstance(value, bool):
        score = DEFAULT_SCORE
    elif isinstance(value, (int, float)):
        score = int(value) if math.isfinite(value) else DEFAULT_SCORE
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        score = int(match.group(1)) if match else DEFAULT_SCORE
    else:
        score = DEFAULT_SCORE
    return max(0, min(100, score))


def parse_evaluator_response(text: str) -> FeedbackResult:
    """
    Parse Gemini's reply into a FeedbackResult.

    Raises:
        EvaluatorResponseError: if the reply is not a JSON object
    """
    try:
        payload = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise EvaluatorResponseError(f"response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise EvaluatorResponseError(
            f"expected a JSON object, got {type(payload).__name__}"
        )

    summary = payload.get("feedback_summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = DEFAULT_SUMMARY

    return FeedbackResult(summary=summary, score=_coerce_score(payload.get("score")))


def _request_ai_feedback(content: str, assignment_description: str) -> _EvaluatorOutcome:
    if not settings.GEMINI_API_KEY:
        return _EvaluatorFallback("GEMINI_API_KEY is not configured")

    try:
        model = _get_model()
        response = model.generate_content(
            build_prompt(content, assignment_description),
            request_options={"timeout": settings.GEMINI_TIMEOUT_SECONDS},
        )
        return _EvaluatorOk(parse_evaluator_response(response.text))
    except Exception as e:
        return _EvaluatorFallback(f"{type(e).__name__}: {e}")


def generate_feedback(content: str, assignment_description: str) -> FeedbackResult:
    """
    Score a submission and summarise feedback for the student.

    Gemini is tried first; any failure (missing key, network error, malformed
    reply) is logged and answered by the rule-based scorer instead. This
    function never raises for evaluator problems.

    Args:
        content: submission text
        assignment_description: description of the assignment being answered

    Returns:
        FeedbackResult with a summary and a score in [0, 100]
    """
    outcome = _request_ai_feedback(content, assignment_description)

    if isinstance(outcome, _EvaluatorOk):
        logger.info(f"Gemini feedback generated: score={outcome.result.score}")
        return outcome.result

    logger.warning(
        f"Gemini feedback generation failed, falling back to rule-based: {outcome.reason}"
    )
    return generate_fallback_feedback(content, assignment_description)
