"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, clear_auth_cookie, get_current_user, set_auth_cookie
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordData,
    ChangePasswordRequest,
    ChangePasswordResponse,
    CurrentUserResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetLinkData,
    UserResponse,
    UserSummary,
)
from app.services.auth import AuthService, get_auth_service
from app.stores.credentials import CredentialStore

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user account. Without ``id_team`` the user becomes manager of a new team."""
    result = auth_service.register(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        surname=body.surname,
        employee_role=body.employeeRole,
        company_name=body.companyName,
        team_name=body.teamName,
        team_id=body.id_team,
    )
    set_auth_cookie(response, result.cookie)
    return AuthResponse(
        code=1,
        message="User registered successfully",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate and receive a session token (also set as a cookie)."""
    result = auth_service.login(db, body.email, body.password)
    set_auth_cookie(response, result.cookie)
    return AuthResponse(
        code=1,
        message="User logged in successfully",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/forgot-password", response_model=ForgotPasswordResponse, response_model_exclude_none=True)
def forgot_password(
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> ForgotPasswordResponse:
    """Email a password reset link. Delivery failure still answers 200 with code -80."""
    result = auth_service.forgot_password(db, body.email)

    data = ResetLinkData(error=result.error)
    if auth_service.settings.EXPOSE_RESET_TOKEN:
        data.token = result.token
        data.link = result.link

    if result.email_sent:
        return ForgotPasswordResponse(code=100, message="Send Email OK", data=data)
    return ForgotPasswordResponse(code=-80, message="Send Email KO", data=data)


@router.post("/change-password", response_model=ChangePasswordResponse)
def change_password(
    body: ChangePasswordRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> ChangePasswordResponse:
    """Set a new password using a recovery token and sign the user in."""
    result = auth_service.change_password(db, body.token, body.password)
    set_auth_cookie(response, result.cookie)
    user = result.user
    return ChangePasswordResponse(
        code=1,
        message="Password changed successfully",
        data=ChangePasswordData(user=UserSummary(name=user.name, surname=user.surname, email=user.email)),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, auth_service: AuthService = Depends(get_auth_service)) -> MessageResponse:
    """Tell the client to discard its session cookie."""
    clear_auth_cookie(response, auth_service.logout())
    return MessageResponse(code=0, message="Logged out - Delete Token")


@router.get("/me", response_model=CurrentUserResponse)
def me(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CurrentUserResponse:
    """Return the profile of the signed-in user."""
    user = CredentialStore(db).find_by_id(current.user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return CurrentUserResponse(code=1, message="User Detail", user=UserResponse.model_validate(user))
