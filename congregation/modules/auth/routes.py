from fastapi import APIRouter, Depends
from congregation.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from congregation.modules.auth.service import AuthService
from congregation.core.dependencies import get_auth_service, get_session, require_authenticated
from congregation.core.security import get_current_token
from congregation.core.session import SessionContext
from typing import Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new member"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    session: SessionContext = Depends(require_authenticated),
    token: Optional[str] = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(session: SessionContext = Depends(get_session)):
    """Resolved session: role, profile and permissions (guest when no token)."""
    return {
        "user_id": session.user_id,
        "email": session.email,
        "role": session.role,
        "profile": session.profile,
        "permissions": session.permissions,
    }
