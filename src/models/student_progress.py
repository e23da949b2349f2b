from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from .base import Base


class StudentProgressModel(Base):
    __tablename__ = "student_progress"
    __table_args__ = (
        UniqueConstraint(
            "username",
            "question_id",
            name="uq_student_progress_username_question",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Not a declared foreign key: progress rows reference users by name only
    username = Column(String, index=True, nullable=False)
    question_id = Column(Integer, nullable=False)
    completed_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
