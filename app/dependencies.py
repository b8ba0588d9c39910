"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, Response

from app.services.jwt import SESSION_COOKIE_NAME, JWTService, SessionCookie, get_jwt_service


@dataclass
class CurrentUser:
    """Authenticated user context."""

    user_id: int
    name: str


def get_current_user(
    request: Request,
    sessions: JWTService = Depends(get_jwt_service),
) -> CurrentUser:
    """Extract and validate user from Bearer token or cookie. Raises 401 if invalid."""
    token: str | None = None

    # Check Authorization header first
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:]

    # Fall back to cookie
    if not token:
        token = request.cookies.get(SESSION_COOKIE_NAME)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = sessions.decode_token(token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return CurrentUser(user_id=int(payload["sub"]), name=payload.get("name", ""))


def set_auth_cookie(response: Response, cookie: SessionCookie) -> None:
    """Set (or overwrite) the session cookie."""
    response.set_cookie(
        key=cookie.key,
        value=cookie.value,
        max_age=cookie.max_age,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )


def clear_auth_cookie(response: Response, cookie: SessionCookie) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=cookie.key,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )
