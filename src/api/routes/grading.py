"""Grading routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from core.dependencies import AnswerGraderDep, ProgressManagerDep
from core.exceptions import ConfigurationError, UpstreamServiceError, GradingError
from schemas.grading import GradeRequest, GradeVerdict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Grading"])


@router.post(
    "/grade",
    response_model=GradeVerdict,
    response_model_exclude_none=True,
    summary="Grade a free-text answer",
)
async def grade(
    req: GradeRequest,
    grader: AnswerGraderDep,
    progress_manager: ProgressManagerDep,
) -> GradeVerdict:
    """Grade an answer and, when correct, record the completion.

    Recording is best effort: any failure while saving is logged and the
    verdict is still returned. Storage calls run in the threadpool.

    Args:
        req: Question, answer, and optionally username and questionId.
        grader: Injected AnswerGrader instance.
        progress_manager: Injected ProgressManager instance.

    Returns:
        GradeVerdict with status and, for Incorrect, a hint.

    Raises:
        HTTPException: 400 on missing question or answer, 500 on missing
            configuration or internal error, 502 on judgment service error.
    """
    if not req.question or not req.answer:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing question or answer",
        )

    try:
        verdict = await grader.grade(req.question, req.answer)
    except ConfigurationError as e:
        logger.error("Grading unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )
    except UpstreamServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="AI service error"
        )
    except GradingError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during grading",
        )

    if verdict.is_correct and req.can_save:
        try:
            await run_in_threadpool(
                progress_manager.record_completion, req.username, req.question_id
            )
        except Exception as e:
            await run_in_threadpool(progress_manager.db.rollback)
            logger.error("Database error (non-fatal): %s", e)

    return verdict
