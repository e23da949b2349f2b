"""User management utilities.

This module provides user registration and credential checks. Password hashes
are computed by the client; this module only stores them and compares them by
plain string equality.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidPasswordError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from models.user import UserModel
from models.student_progress import StudentProgressModel
from schemas.user import LoginResponse, User

logger = logging.getLogger(__name__)


def model_to_user(model: UserModel) -> User:
    return User(
        username=model.username,
        first_name=model.first_name,
        last_name=model.last_name,
    )


class UserManager:
    """Manages user data persistence and authentication using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def create_user(
        self,
        username: str,
        first_name: str,
        last_name: str,
        password_hash: str,
    ) -> User:
        """Create a new user.

        Args:
            username: Username for the new user (case-sensitive).
            first_name: First name.
            last_name: Last name.
            password_hash: Opaque password hash supplied by the client.

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If username already exists.
        """
        # Check if user already exists
        existing = (
            self.db.query(UserModel.id).filter(UserModel.username == username).first()
        )
        if existing:
            raise UserAlreadyExistsError(username)

        model = UserModel(
            username=username,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
        )

        # Two concurrent signups can both pass the check above; the unique
        # constraint on username catches the second one.
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "username" in str(e).lower() or "unique" in str(e).lower():
                raise UserAlreadyExistsError(username) from e
            raise

        logger.info("Created user: %s", username)
        return model_to_user(model)

    def get_user_by_username(self, username: str) -> Optional[UserModel]:
        """Get a user row by username.

        Args:
            username: Username to look up.

        Returns:
            UserModel if found, None otherwise.
        """
        return self.db.query(UserModel).filter(UserModel.username == username).first()

    def list_completed_ids(self, username: str) -> List[int]:
        """List the question ids a user has completed, ascending."""
        rows = (
            self.db.query(StudentProgressModel.question_id)
            .filter(StudentProgressModel.username == username)
            .order_by(StudentProgressModel.question_id.asc())
            .all()
        )
        return [row.question_id for row in rows]

    def authenticate(self, username: str, password_hash: str) -> LoginResponse:
        """Verify credentials and return the user's identity and progress.

        Args:
            username: Username to log in as.
            password_hash: Opaque hash to compare against the stored one.

        Returns:
            LoginResponse with identity fields and completed question ids.

        Raises:
            UserNotFoundError: If the username does not exist.
            InvalidPasswordError: If the hash does not match.
        """
        model = self.get_user_by_username(username)
        if model is None:
            raise UserNotFoundError(username)
        if model.password_hash != password_hash:
            raise InvalidPasswordError(username)

        return LoginResponse(
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            completed_ids=self.list_completed_ids(username),
        )
