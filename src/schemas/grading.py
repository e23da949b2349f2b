"""Grading schema definitions."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class GradeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    answer: Optional[str] = None
    username: Optional[str] = Field(
        default=None,
        description="Together with questionId, enables recording a completion.",
    )
    question_id: Optional[int] = Field(default=None, alias="questionId")

    @property
    def can_save(self) -> bool:
        """Whether a correct verdict should be recorded as a completion."""
        return bool(self.username) and self.question_id is not None


class GradeVerdict(BaseModel):
    """Verdict returned by the judgment service."""

    status: Literal["Correct", "Incorrect"]
    hint: Optional[str] = Field(
        default=None,
        description="Short corrective hint, only present on Incorrect verdicts.",
    )

    @property
    def is_correct(self) -> bool:
        return self.status == "Correct"
