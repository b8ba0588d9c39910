"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base, get_db
from app.models.recovery_token import RecoveryToken  # noqa: F401
from app.models.team import Team  # noqa: F401
from app.models.user import User  # noqa: F401
from app.services.auth import AuthService, get_auth_service
from app.services.jwt import get_jwt_service
from app.services.notifications import EmailDeliveryError, NotificationGateway
from app.services.password import PasswordHasher


class RecordingGateway(NotificationGateway):
    """Keeps sent messages in memory; can be told to fail."""

    def __init__(self) -> None:
        self.sent = []
        self.fail = False

    def send(self, message) -> None:
        if self.fail:
            raise EmailDeliveryError("SMTP relay unreachable")
        self.sent.append(message)


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    settings = Settings()
    settings.BCRYPT_ROUNDS = 4
    settings.CLIENT_URL = "https://app.example.com"
    settings.EXPOSE_RESET_TOKEN = True
    settings.RECOVERY_TOKEN_TTL_MINUTES = 0
    return settings


@pytest.fixture(name="gateway")
def gateway_fixture() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture(name="auth_service")
def auth_service_fixture(settings: Settings, gateway: RecordingGateway) -> AuthService:
    """Auth service with a cheap bcrypt cost and an in-memory mailbox."""
    return AuthService(
        settings=settings,
        hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        sessions=get_jwt_service(),
        notifier=gateway,
    )


@pytest.fixture(name="client")
def client_fixture(db_session: Session, auth_service: AuthService):
    """Create a test client with overridden DB and auth service dependencies.

    Served over https so the Secure session cookie round-trips.
    """
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app, base_url="https://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session, auth_service: AuthService):
    """Register a manager (with a new team) and return its data and token."""
    result = auth_service.register(
        db_session,
        email="test@example.com",
        password="password123",
        name="Test",
        surname="User",
        employee_role="Engineer",
        company_name="Acme",
        team_name="Platform",
    )
    return {
        "user_id": result.user.id,
        "email": result.user.email,
        "name": result.user.name,
        "team_id": result.user.team_id,
        "token": result.token,
    }
