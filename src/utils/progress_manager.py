"""Student progress management.

This module records question completions and aggregates them into the
leaderboard.
"""

import logging
from datetime import datetime
from typing import List

import pytz
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from models.student_progress import StudentProgressModel
from models.user import UserModel
from schemas.leaderboard import LeaderboardEntry

logger = logging.getLogger(__name__)

# Dialects with native INSERT ... ON CONFLICT DO UPDATE support
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ProgressManager:
    """Manages completion records using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize ProgressManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def record_completion(self, username: str, question_id: int) -> datetime:
        """Insert or refresh the completion of a question by a user.

        At most one row exists per (username, question_id); completing the
        same question again only moves ``completed_at`` forward.

        Args:
            username: Username that completed the question.
            question_id: Externally defined question identifier.

        Returns:
            The timestamp written to ``completed_at``.

        Raises:
            ValueError: If the database dialect has no upsert support.
            sqlalchemy.exc.SQLAlchemyError: On storage failure.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise ValueError(f"Unsupported database dialect for upsert: {dialect}")

        now = datetime.now(pytz.utc)
        stmt = insert(StudentProgressModel).values(
            username=username,
            question_id=question_id,
            completed_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["username", "question_id"],
            set_={"completed_at": now},
        )
        self.db.execute(stmt)
        self.db.commit()
        logger.info("Saved: username=%r question_id=%s", username, question_id)
        return now

    def get_leaderboard(self) -> List[LeaderboardEntry]:
        """Count completions per user.

        Users without completions are included with a count of zero. Sorted
        by count descending, ties broken by username ascending.
        """
        done = func.count(StudentProgressModel.question_id).label("done")
        rows = (
            self.db.query(
                UserModel.username,
                UserModel.first_name,
                UserModel.last_name,
                done,
            )
            .outerjoin(
                StudentProgressModel,
                StudentProgressModel.username == UserModel.username,
            )
            .group_by(UserModel.username, UserModel.first_name, UserModel.last_name)
            .order_by(done.desc(), UserModel.username.asc())
            .all()
        )
        return [
            LeaderboardEntry(
                username=row.username,
                first_name=row.first_name,
                last_name=row.last_name,
                done=int(row.done),
            )
            for row in rows
        ]
