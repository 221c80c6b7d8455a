from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="jobboard-tests-"))
os.environ["APP_ENV"] = "test"
os.environ["DATA_DIR"] = str(_TEST_ROOT)
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'jobboard_test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
for _name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASS", "SMTP_FROM"):
    os.environ[_name] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobboard.api.app import create_app  # noqa: E402
from jobboard.config import get_settings  # noqa: E402
from jobboard.db.base import Base  # noqa: E402
from jobboard.db.session import engine  # noqa: E402
from jobboard.db import models  # noqa: E402,F401


class FakeMailer:
    sender = "jobs@example.com"

    def __init__(self, fail: bool = False) -> None:
        self.sent = []
        self.fail = fail

    def send(self, message) -> None:
        if self.fail:
            raise ConnectionRefusedError("smtp down")
        self.sent.append(message)


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    upload_dir = get_settings().upload_dir
    shutil.rmtree(upload_dir, ignore_errors=True)
    upload_dir.mkdir(parents=True, exist_ok=True)
    yield


@pytest.fixture
def upload_dir() -> Path:
    return get_settings().upload_dir


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def mailer(monkeypatch) -> FakeMailer:
    fake = FakeMailer()
    monkeypatch.setattr("jobboard.core.workflow.get_mailer", lambda settings=None: fake)
    return fake


def register(client: TestClient, *, name: str, email: str, role: str, password: str = "secret123") -> dict:
    resp = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['token']}"}}


def post_job(client: TestClient, headers: dict, **overrides) -> int:
    payload = {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Remote",
        "description": "Build APIs",
        "salary": "100k",
    }
    payload.update(overrides)
    resp = client.post("/api/jobs", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["jobId"]


@pytest.fixture
def employer(client) -> dict:
    return register(client, name="Erin Employer", email="erin@acme.com", role="employer")


@pytest.fixture
def seeker(client) -> dict:
    return register(client, name="Ann", email="ann@x.com", role="jobseeker")
