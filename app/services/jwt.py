"""Session token issuer (JWT) and session cookie contract."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.config import Settings, get_settings

SESSION_COOKIE_NAME = "token"


@dataclass(frozen=True)
class SessionCookie:
    """Transport attributes for the session cookie."""

    value: str
    max_age: int
    secure: bool
    key: str = SESSION_COOKIE_NAME
    httponly: bool = True
    samesite: str = "none"
    path: str = "/"


class JWTService:
    """Handles session token creation and validation."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.max_age = timedelta(days=settings.SESSION_MAX_AGE_DAYS)
        self.cookie_secure = settings.COOKIE_SECURE

    def issue(self, user_id: int, name: str) -> str:
        """Create a signed session token for the given user."""
        now = datetime.utcnow()
        payload = {
            "sub": str(user_id),
            "name": name,
            "iat": now,
            "exp": now + self.max_age,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a session token. Returns None if invalid or expired."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def cookie_for(self, token: str) -> SessionCookie:
        return SessionCookie(value=token, max_age=int(self.max_age.total_seconds()), secure=self.cookie_secure)

    def expired_cookie(self) -> SessionCookie:
        """Cookie that makes the client discard its session immediately."""
        return SessionCookie(value="", max_age=0, secure=self.cookie_secure)


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JWTService()
    return _jwt_service
