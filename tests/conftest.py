import os

# Settings are read once at import time, so the environment is fixed first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["AUTH_SECRET_KEY"] = "test-secret"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["LOG_LEVEL"] = "WARNING"
for _key in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD"):
    os.environ[_key] = ""

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import List  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.dependencies import get_notifier  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db import configure_engine, get_session_factory  # noqa: E402
from app.db.base import Base, import_models  # noqa: E402
from app.main import create_app  # noqa: E402
from app.repositories.complaint import ComplaintRepository  # noqa: E402
from app.services.notification import NotificationOutcome  # noqa: E402


class RecordingNotifier:
    """Stands in for ComplaintNotifier and remembers what it was asked to send."""

    def __init__(self):
        self.new_complaints: List = []
        self.status_changes: List = []

    def notify_new_complaint(self, complaint):
        self.new_complaints.append(complaint)
        return NotificationOutcome.sent(f"<new-{complaint.id}@test>")

    def notify_status_change(self, complaint):
        self.status_changes.append(complaint)
        return NotificationOutcome.sent(f"<status-{complaint.id}@test>")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_engine(engine)
    import_models()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session):
    return ComplaintRepository(db_session)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(engine, notifier):
    application = create_app()
    application.dependency_overrides[get_notifier] = lambda: notifier
    return TestClient(application)


def bearer(user_id: str, role: str = "user") -> dict:
    token = create_access_token({"sub": user_id, "role": role, "email": f"{user_id}@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    return bearer("user-1")


@pytest.fixture
def admin_headers():
    return bearer("admin-1", role="admin")


@pytest.fixture
def seed_complaints(engine):
    """
    Insert complaints with explicit, increasing submission times.

    Complaint ``i`` is titled ``"Complaint i"`` and submitted ``i`` minutes
    after a fixed base time.
    """
    def _seed(rows):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        session = get_session_factory()()
        try:
            repo = ComplaintRepository(session)
            ids = []
            for index, row in enumerate(rows):
                fields = {
                    "title": f"Complaint {index}",
                    "description": "Seeded complaint",
                    "category": "Service",
                    "priority": "Low",
                }
                status = row.pop("status", None) if isinstance(row, dict) else None
                fields.update(row or {})
                complaint = repo.create_complaint(**fields)
                complaint.date_submitted = base + timedelta(minutes=index)
                if status:
                    repo.update_complaint(complaint.id, {"status": status})
                ids.append(complaint.id)
            session.commit()
            return ids
        finally:
            session.close()

    return _seed
