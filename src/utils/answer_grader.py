"""Answer grader module.

This module provides the AnswerGrader class, which asks an external language
model whether a student's free-text answer to a programming question is
correct, and turns its reply into a verdict.
"""

import json
import logging
import os
from typing import Any, Optional

from langchain_core.utils.json import parse_json_markdown
from openai import APIStatusError

from config import (
    DEFAULT_GRADER_HINT,
    GRADER_API_KEY_ENV,
    GRADER_BASE_URL,
    GRADER_MAX_TOKENS,
    GRADER_MODEL,
    GRADER_TEMPERATURE,
)
from core.exceptions import ConfigurationError, GradingError, UpstreamServiceError
from schemas.grading import GradeVerdict

logger = logging.getLogger(__name__)

# Grading prompt template
GRADING_PROMPT_TEMPLATE = """You are a strict but fair computer programming examiner grading a student's answer.

Question: {question}

Student's Answer: {answer}

Grade this answer. Respond ONLY with a valid JSON object in exactly this format:
- If the answer is correct or substantially correct: {{"status": "Correct"}}
- If the answer is wrong or incomplete: {{"status": "Incorrect", "hint": "One short, helpful hint to guide the student (max 20 words)"}}

Be strict: vague or incomplete answers should be marked Incorrect. But do not penalise for minor grammar or formatting issues; focus on conceptual correctness.
Respond with JSON only. No extra text."""

def build_grading_prompt(question: str, answer: str) -> str:
    return GRADING_PROMPT_TEMPLATE.format(question=question, answer=answer)


def _verdict_from_json(data: Any) -> Optional[GradeVerdict]:
    """Map a parsed JSON object onto a verdict, or None if it is not one."""
    if not isinstance(data, dict):
        return None
    status = str(data.get("status", "")).strip().lower()
    if status == "correct":
        return GradeVerdict(status="Correct")
    if status == "incorrect":
        hint = data.get("hint")
        return GradeVerdict(
            status="Incorrect",
            hint=str(hint) if hint else DEFAULT_GRADER_HINT,
        )
    return None


def parse_verdict(raw: str) -> GradeVerdict:
    """Parse the model's reply into a verdict.

    Two stages: a strict ``json.loads`` (Markdown code fences are stripped
    first; truncated JSON or trailing text fails it), then a substring match
    on "correct". The model is not guaranteed to follow the format, so the
    second stage must stay. Note that "incorrect" also contains "correct".

    Args:
        raw: Raw text content of the model reply.

    Returns:
        GradeVerdict; never raises on malformed input.
    """
    try:
        verdict = _verdict_from_json(parse_json_markdown(raw, parser=json.loads))
    except json.JSONDecodeError:
        verdict = None
    if verdict is not None:
        return verdict

    logger.warning("Could not parse verdict as JSON, using fallback: %r", raw)
    if "correct" in raw.lower():
        return GradeVerdict(status="Correct")
    return GradeVerdict(status="Incorrect", hint=DEFAULT_GRADER_HINT)


class AnswerGrader:
    """Grades free-text answers with a single LLM call.

    There is no retry and no timeout beyond the HTTP client's default; a
    failed call is reported to the caller immediately.
    """

    def __init__(self, llm: Optional[Any] = None):
        """Initialize the grader.

        Args:
            llm: Chat model exposing ``ainvoke``. If None, one is built from
                configuration on first use.
        """
        self._llm = llm

    @property
    def llm(self) -> Any:
        if self._llm is None:
            self._llm = self._get_grader_llm()
        return self._llm

    def _get_grader_llm(self) -> Any:
        """Build the judgment service client.

        Returns:
            ChatOpenAI instance pointed at the OpenAI-compatible endpoint.

        Raises:
            ConfigurationError: If the API key environment variable is unset.
        """
        from langchain_openai import ChatOpenAI

        api_key = os.getenv(GRADER_API_KEY_ENV)
        if not api_key:
            raise ConfigurationError(f"{GRADER_API_KEY_ENV} is not configured")

        return ChatOpenAI(
            model=GRADER_MODEL,
            api_key=api_key,
            base_url=GRADER_BASE_URL,
            temperature=GRADER_TEMPERATURE,
            max_tokens=GRADER_MAX_TOKENS,
            max_retries=0,
        )

    async def grade(self, question: str, answer: str) -> GradeVerdict:
        """Grade an answer.

        Args:
            question: The question prompt shown to the student.
            answer: The student's free-text answer.

        Returns:
            GradeVerdict parsed from the model reply.

        Raises:
            ConfigurationError: If no API key is configured. No call is made.
            UpstreamServiceError: If the service answered with an error status.
            GradingError: If the call failed for any other reason.
        """
        llm = self.llm
        prompt = build_grading_prompt(question, answer)

        try:
            response = await llm.ainvoke(prompt)
        except APIStatusError as e:
            logger.error("Judgment service error (%s): %s", e.status_code, e.message)
            raise UpstreamServiceError(e.status_code, e.message) from e
        except Exception as e:
            logger.error("Judgment service call failed: %s", e)
            raise GradingError(str(e)) from e

        # Extract content from AIMessage (LangChain returns AIMessage object)
        content = response.content if hasattr(response, "content") else str(response)
        return parse_verdict(str(content).strip())
