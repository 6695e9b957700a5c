"""
Shared fixtures.

The environment is configured before anything from jobboard is imported:
settings are cached and the engine is created at import time.
"""
import os
import shutil
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="jobboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'jobboard.db')}"
os.environ["UPLOADS_DIR"] = os.path.join(_TMP_DIR, "uploads", "resumes")
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["GEMINI_BASE_URL"] = "https://parser.test/v1"
os.environ["GEMINI_MAX_RETRIES"] = "0"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event, text

from jobboard.core.config import get_settings
from jobboard.db.postgres import engine, get_db_session
from jobboard.db.schema import init_db
from jobboard.main import app
from jobboard.services.gemini_client import GeminiClient
from jobboard.services.profile_store import ProfileStore
from jobboard.services.resume_service import ResumeIngestionService, get_resume_service
from tests.helpers import FakeParserAPI


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture(scope="session")
def settings():
    return get_settings()


@pytest.fixture(scope="session", autouse=True)
def _schema():
    init_db()
    yield
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_state(settings):
    with get_db_session() as db:
        for table in ("applications", "profiles", "jobs", "users"):
            db.execute(text(f"DELETE FROM {table}"))
    shutil.rmtree(settings.uploads_dir, ignore_errors=True)
    yield


@pytest.fixture
def parser_api():
    return FakeParserAPI()


@pytest.fixture
def gemini_client(settings, parser_api):
    http_client = httpx.Client(transport=httpx.MockTransport(parser_api))
    yield GeminiClient(settings, http_client=http_client)
    http_client.close()


@pytest.fixture
def profile_store():
    return ProfileStore()


@pytest.fixture
def resume_service(settings, gemini_client, profile_store):
    return ResumeIngestionService(settings, parser=gemini_client, profile_store=profile_store)


@pytest.fixture
def client(resume_service):
    app.dependency_overrides[get_resume_service] = lambda: resume_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Sign up and log in a user; returns (auth headers, user_id)."""
    counter = {"n": 0}

    def _register(user_type: str = "Applicant", email: str = None, password: str = "secret123"):
        counter["n"] += 1
        email = email or f"{user_type.lower()}{counter['n']}@acme.io"
        response = client.post("/api/auth/signup", json={
            "name": f"{user_type} {counter['n']}",
            "email": email,
            "password": password,
            "user_type": user_type,
            "profile_headline": "Backend engineer",
        })
        assert response.status_code == 201, response.text
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user_id"]

    return _register


@pytest.fixture
def make_user():
    """Insert an applicant row directly; returns its user_id."""
    counter = {"n": 0}

    def _make_user(email: str = None) -> int:
        counter["n"] += 1
        email = email or f"applicant{counter['n']}@acme.io"
        with get_db_session() as db:
            result = db.execute(
                text("""
                    INSERT INTO users (name, email, user_type, password_hash)
                    VALUES (:name, :email, 'Applicant', 'not-a-real-hash')
                    RETURNING user_id
                """),
                {"name": f"Applicant {counter['n']}", "email": email}
            )
            return result.fetchone()[0]

    return _make_user
