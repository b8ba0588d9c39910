"""Authentication service: registration, login and password recovery."""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.exceptions import (
    DuplicateEmailError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    TeamNotFoundError,
    UserNotFoundError,
)
from app.models.team import Team
from app.models.user import ROLE_MANAGER, ROLE_USER, User
from app.services.jwt import JWTService, SessionCookie, get_jwt_service
from app.services.notifications import (
    EmailDeliveryError,
    NotificationGateway,
    build_reset_password_email,
    get_notification_gateway,
)
from app.services.password import PasswordHasher
from app.stores.credentials import CredentialStore
from app.stores.recovery_tokens import RecoveryTokenStore

logger = logging.getLogger("teampulse.auth")

RECOVERY_TOKEN_BYTES = 32


def generate_recovery_token() -> str:
    """Return an unguessable 64-character hex token."""
    return secrets.token_hex(RECOVERY_TOKEN_BYTES)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class AuthResult:
    """A signed-in user with the session that was issued for them."""

    user: User
    token: str
    cookie: SessionCookie


@dataclass
class ForgotPasswordResult:
    """Outcome of a reset request. Delivery failure is reported, not raised."""

    email_sent: bool
    token: str
    link: str
    error: str | None = None


class AuthService:
    """Handles user registration, authentication and password recovery.

    Holds no per-request state; every workflow runs over the caller's session
    and commits at most once.
    """

    def __init__(
        self,
        settings: Settings,
        hasher: PasswordHasher,
        sessions: JWTService,
        notifier: NotificationGateway,
    ) -> None:
        self.settings = settings
        self.hasher = hasher
        self.sessions = sessions
        self.notifier = notifier

    def _sign_in(self, user: User) -> AuthResult:
        token = self.sessions.issue(user_id=user.id, name=user.name)
        return AuthResult(user=user, token=token, cookie=self.sessions.cookie_for(token))

    def register(
        self,
        db: Session,
        email: str,
        password: str,
        name: str,
        surname: str | None,
        employee_role: str,
        company_name: str | None = None,
        team_name: str | None = None,
        team_id: int | None = None,
    ) -> AuthResult:
        """Register a new user, creating a team for them unless they join an existing one."""
        email = normalize_email(email)
        users = CredentialStore(db)

        if users.find_by_email(email):
            raise DuplicateEmailError()

        # A falsy team id (absent or 0) means "start a new team"
        joining = bool(team_id)
        if joining and users.find_team(team_id) is None:
            raise TeamNotFoundError()

        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            name=name,
            surname=surname or None,
            employee_role=employee_role,
            status=1,
            roles=frozenset({ROLE_USER if joining else ROLE_MANAGER}),
            team_id=team_id if joining else None,
        )

        try:
            users.create(user)
            if not joining:
                team = users.create_team(
                    Team(manager_user_id=user.id, company_name=company_name, team_name=team_name)
                )
                user.team_id = team.id
                users.update(user)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)

        logger.info("Registered user %s (%s) in team %s", user.id, user.email, user.team_id)
        return self._sign_in(user)

    def login(self, db: Session, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password."""
        user = CredentialStore(db).find_by_email(normalize_email(email))
        if not user:
            raise UserNotFoundError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for user %s", user.id)
            raise InvalidCredentialsError()

        return self._sign_in(user)

    def forgot_password(self, db: Session, email: str) -> ForgotPasswordResult:
        """Issue a recovery token for the user and email them a reset link."""
        user = CredentialStore(db).find_by_email(normalize_email(email))
        if not user:
            raise UserNotFoundError("Email does not exist", code=-8, status_code=404)

        token = generate_recovery_token()
        try:
            RecoveryTokenStore(db).create(user_id=user.id, token=token, created_at=datetime.utcnow())
            db.commit()
        except Exception:
            db.rollback()
            raise

        link = f"{self.settings.CLIENT_URL}/change-password?token={token}&id={user.id}"
        message = build_reset_password_email(user.email, user.name, link)
        try:
            self.notifier.send(message)
        except EmailDeliveryError as e:
            logger.warning("Reset email for user %s not delivered: %s", user.id, e)
            return ForgotPasswordResult(email_sent=False, token=token, link=link, error="Email delivery failed")

        logger.info("Reset email sent to user %s", user.id)
        return ForgotPasswordResult(email_sent=True, token=token, link=link)

    def change_password(self, db: Session, token: str, new_password: str) -> AuthResult:
        """Set a new password with a recovery token, consuming every token of that user."""
        tokens = RecoveryTokenStore(db)
        row = tokens.find_by_token(token)
        if not row:
            raise InvalidTokenError()

        ttl = self.settings.RECOVERY_TOKEN_TTL_MINUTES
        if ttl > 0 and row.created_at + timedelta(minutes=ttl) < datetime.utcnow():
            tokens.delete_all_for_user(row.user_id)
            db.commit()
            raise ExpiredTokenError()

        users = CredentialStore(db)
        user = users.find_by_id(row.user_id)
        if not user:
            raise UserNotFoundError("User not found", code=-10, status_code=404)

        try:
            user.password_hash = self.hasher.hash(new_password)
            users.update(user)
            deleted = tokens.delete_all_for_user(user.id)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Password changed for user %s (%d recovery tokens revoked)", user.id, deleted)
        return self._sign_in(user)

    def logout(self) -> SessionCookie:
        """Sessions are stateless: logging out only tells the client to drop its cookie."""
        return self.sessions.expired_cookie()


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        settings = get_settings()
        _auth_service = AuthService(
            settings=settings,
            hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            sessions=get_jwt_service(),
            notifier=get_notification_gateway(settings),
        )
    return _auth_service
