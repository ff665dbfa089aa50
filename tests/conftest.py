import pytest

from config import apply_test_environment

apply_test_environment()

from fastapi.testclient import TestClient  # noqa: E402

from office_api.core.database import engine, SessionLocal  # noqa: E402
from office_api.dependencies import get_db, get_notification_service  # noqa: E402
from office_api.main import app  # noqa: E402
from office_api.models import Base  # noqa: E402


class RecordingNotifier:
    """Stands in for NotificationService and remembers which offices it was asked about."""

    def __init__(self):
        self.office_ids = []

    def notify_office_pending_approval(self, db, office, background_tasks):
        self.office_ids.append(office.id)
        return True


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(db, notifier):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
