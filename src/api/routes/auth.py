"""Authentication routes.

This module handles HTTP endpoints for user registration and login.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.dependencies import UserManagerDep
from core.exceptions import (
    InvalidPasswordError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from schemas.user import LoginRequest, LoginResponse, SignupRequest, SignupResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/signup", response_model=SignupResponse, summary="Register a user")
def signup(req: SignupRequest, user_manager: UserManagerDep) -> SignupResponse:
    """Register a new user.

    Args:
        req: Signup request with username, names and password hash.
        user_manager: Injected UserManager instance.

    Returns:
        SignupResponse echoing the identity fields.

    Raises:
        HTTPException: 400 on missing fields, 409 if the username is taken,
            500 on storage failure.
    """
    if not (req.username and req.first_name and req.last_name and req.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing fields"
        )

    try:
        user = user_manager.create_user(
            username=req.username,
            first_name=req.first_name,
            last_name=req.last_name,
            password_hash=req.password_hash,
        )
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("Signup error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during signup",
        )

    return SignupResponse(**user.model_dump())


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(req: LoginRequest, user_manager: UserManagerDep) -> LoginResponse:
    """Verify credentials and return the user's completed questions.

    Raises:
        HTTPException: 400 on missing fields, 401 on unknown username or
            wrong password (with distinct messages), 500 on storage failure.
    """
    if not (req.username and req.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing fields"
        )

    try:
        return user_manager.authenticate(req.username, req.password_hash)
    except (UserNotFoundError, InvalidPasswordError) as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("Login error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login",
        )
