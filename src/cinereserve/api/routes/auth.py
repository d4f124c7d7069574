"""Registration, login and session endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from cinereserve.api.deps import SESSION_USER_KEY, get_accounts, get_current_user
from cinereserve.schemas import (
    AuthStatus,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionUser,
)
from cinereserve.services.accounts import AccountService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    request: RegisterRequest,
    actor: SessionUser | None = Depends(get_current_user),
    accounts: AccountService = Depends(get_accounts),
) -> RegisterResponse:
    """Create an account. Staff roles can only be assigned by a logged-in admin."""
    user_id = await accounts.register(
        request.username, request.password, request.role, actor=actor
    )
    return RegisterResponse(user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    accounts: AccountService = Depends(get_accounts),
) -> LoginResponse:
    user = await accounts.authenticate(body.username, body.password)
    request.session[SESSION_USER_KEY] = user.model_dump()
    logger.info(f"User {user.username!r} logged in")
    return LoginResponse(user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request) -> MessageResponse:
    request.session.clear()
    return MessageResponse(message="Logged out successfully")


@router.get("/auth", response_model=AuthStatus, response_model_exclude_none=True)
async def auth_status(user: SessionUser | None = Depends(get_current_user)) -> AuthStatus:
    return AuthStatus(authenticated=user is not None, user=user)
