"""ORM models. Importing this package registers every table on Base.metadata."""

from .base import Base
from .user import UserModel
from .student_progress import StudentProgressModel

__all__ = ["Base", "UserModel", "StudentProgressModel"]
