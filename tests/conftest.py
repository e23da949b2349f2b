"""Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database wired into the app through
``app.dependency_overrides``; the judgment service is replaced per test.
"""

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from core.database import get_db, init_db
from core.dependencies import get_answer_grader
from utils.answer_grader import AnswerGrader


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_llm(client):
    """Install a chat model (real or mock) behind the grader dependency."""

    def _install(llm):
        app.dependency_overrides[get_answer_grader] = lambda: AnswerGrader(llm=llm)
        return llm

    return _install


@pytest.fixture
def grader_replies(use_llm):
    """Make the judgment service answer with the given texts, in order."""

    def _install(*responses: str):
        return use_llm(FakeListChatModel(responses=list(responses)))

    return _install


def signup(client, username, first_name="Ana", last_name="Lee", password_hash="h1"):
    return client.post(
        "/api/signup",
        json={
            "username": username,
            "firstName": first_name,
            "lastName": last_name,
            "passwordHash": password_hash,
        },
    )
