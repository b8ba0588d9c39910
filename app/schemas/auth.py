"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Surrounding whitespace is dropped before length checks; passwords are taken verbatim.
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]
EmployeeRole = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class RegisterRequest(BaseModel):
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)
    name: Name
    surname: Annotated[str, StringConstraints(strip_whitespace=True, max_length=30)] | None = None
    employeeRole: EmployeeRole
    companyName: OptionalText | None = None
    teamName: OptionalText | None = None
    id_team: int | None = None


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)


class ChangePasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public view of a user record. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    surname: str | None = None
    employee_role: str
    roles: list[str]
    photo: str | None = None
    team_id: int | None = None
    status: int
    created_at: datetime
    updated_at: datetime

    @field_validator("roles", mode="before")
    @classmethod
    def sort_roles(cls, value: Any) -> list[str]:
        return sorted(value or [])


class UserSummary(BaseModel):
    name: str
    surname: str | None = None
    email: str


class AuthResponse(BaseModel):
    code: int
    message: str
    token: str
    user: UserResponse


class ResetLinkData(BaseModel):
    token: str | None = None
    link: str | None = None
    error: str | None = None


class ForgotPasswordResponse(BaseModel):
    code: int
    message: str
    data: ResetLinkData


class ChangePasswordData(BaseModel):
    user: UserSummary


class ChangePasswordResponse(BaseModel):
    code: int
    message: str
    data: ChangePasswordData


class MessageResponse(BaseModel):
    code: int
    message: str


class CurrentUserResponse(BaseModel):
    code: int
    message: str
    user: UserResponse
