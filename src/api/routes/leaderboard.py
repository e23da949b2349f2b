"""Leaderboard routes."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import ProgressManagerDep
from schemas.leaderboard import LeaderboardEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Leaderboard"])


@router.get(
    "/leaderboard",
    response_model=List[LeaderboardEntry],
    summary="Completion counts per user",
)
def leaderboard(progress_manager: ProgressManagerDep) -> List[LeaderboardEntry]:
    """List every user with their completion count, most completions first."""
    try:
        return progress_manager.get_leaderboard()
    except SQLAlchemyError as e:
        logger.error("Leaderboard DB error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not load leaderboard",
        )
