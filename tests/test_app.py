import pytest
from sqlalchemy.orm import sessionmaker

import app as app_module
from core.database import create_db_engine, get_db, init_db
from core.exceptions import ConfigurationError


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_route_serves_index(client, tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<h1>Tracker</h1>")
    monkeypatch.setattr(app_module, "PUBLIC_DIR", tmp_path)

    response = client.get("/some/client/route")

    assert response.status_code == 200
    assert "<h1>Tracker</h1>" in response.text


def test_static_file_is_served(client, tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<h1>Tracker</h1>")
    (tmp_path / "app.js").write_text("console.log('hi');")
    monkeypatch.setattr(app_module, "PUBLIC_DIR", tmp_path)

    response = client.get("/app.js")

    assert response.status_code == 200
    assert "console.log" in response.text


def test_path_traversal_falls_back_to_index(client, tmp_path, monkeypatch):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Tracker</h1>")
    (tmp_path / "secret.txt").write_text("secret")
    monkeypatch.setattr(app_module, "PUBLIC_DIR", public)

    response = client.get("/..%2Fsecret.txt")

    assert "secret" not in response.text


def test_unknown_api_route_is_not_found(client, tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<h1>Tracker</h1>")
    monkeypatch.setattr(app_module, "PUBLIC_DIR", tmp_path)

    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_missing_public_dir_is_not_found(client, tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "PUBLIC_DIR", tmp_path / "missing")

    response = client.get("/")

    assert response.status_code == 404


def test_get_db_always_closes_session(monkeypatch):
    closed = []

    class FakeSession:
        def close(self):
            closed.append(True)

    monkeypatch.setattr("core.database.SessionLocal", FakeSession)
    gen = get_db()
    next(gen)
    try:
        gen.throw(RuntimeError("handler failed"))
    except RuntimeError:
        pass

    assert closed == [True]


@pytest.fixture
def unconfigured_db(client):
    """Route sessions to a factory with no engine, as when DATABASE_URL is unset."""
    unbound = sessionmaker()

    def unbound_db():
        db = unbound()
        try:
            yield db
        finally:
            db.close()

    app_module.app.dependency_overrides[get_db] = unbound_db


@pytest.mark.parametrize(
    "method, path, payload, message",
    [
        (
            "post",
            "/api/signup",
            {"username": "ana", "firstName": "Ana", "lastName": "Lee", "passwordHash": "h1"},
            "Server error during signup",
        ),
        (
            "post",
            "/api/login",
            {"username": "ana", "passwordHash": "h1"},
            "Server error during login",
        ),
        ("get", "/api/leaderboard", None, "Could not load leaderboard"),
    ],
)
def test_storage_routes_fail_without_database_url(
    client, unconfigured_db, method, path, payload, message
):
    kwargs = {"json": payload} if payload is not None else {}

    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_no_engine_without_database_url():
    assert create_db_engine(None) is None
    assert create_db_engine("") is None
    assert create_db_engine("sqlite://") is not None


def test_init_db_requires_database_url(monkeypatch):
    monkeypatch.setattr("core.database.engine", None)

    with pytest.raises(ConfigurationError, match="DATABASE_URL is not set"):
        init_db()


def test_startup_logs_missing_database_url(monkeypatch, caplog):
    monkeypatch.setattr("core.database.engine", None)

    app_module.startup_tasks()

    assert "DATABASE_URL is not set" in caplog.text
