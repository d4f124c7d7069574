"""Pydantic schemas for accounts and sessions."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Any = None
    password: Any = None
    role: Any = None


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Any = None
    password: Any = None


class RoleUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Any = None


class SessionUser(BaseModel):
    """The identity stored in the signed session cookie."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "User registered successfully"
    user_id: int = Field(alias="userId")


class LoginResponse(BaseModel):
    message: str = "Login successful"
    user: SessionUser


class AuthStatus(BaseModel):
    authenticated: bool
    user: SessionUser | None = None


class UsersResponse(BaseModel):
    success: bool = True
    count: int
    data: list[SessionUser]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
