"""
Core dependencies for session resolution and route protection
"""

from fastapi import Depends, HTTPException, Request, status
from congregation.config.permissions_config import Role
from congregation.core.security import get_current_token
from congregation.core.session import SessionContext, resolve_session
from congregation.database.gateway import DataGateway, get_gateway
from congregation.database.supabase_client import get_supabase
from congregation.modules.auth.service import AuthService
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    token: Optional[str] = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Identity from the bearer token, or None for guests"""
    if token is None:
        return None
    return auth_service.get_current_user(token)


def get_session(
    request: Request,
    user_data: Optional[Dict[str, Any]] = Depends(get_current_user),
    gateway: DataGateway = Depends(get_gateway)
) -> SessionContext:
    """Request-scoped SessionContext (role + profile) for the caller."""
    if not hasattr(request.state, "session_context"):
        request.state.session_context = resolve_session(user_data, gateway)
    return request.state.session_context


def require_authenticated(session: SessionContext = Depends(get_session)) -> SessionContext:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return session


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(session: SessionContext = Depends(get_session)) -> SessionContext:
        if session.has_permission(required_permission):
            return session
        if not session.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required"
            )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Required: {required_permission}"
        )
    return check_permission


def require_admin(session: SessionContext = Depends(require_authenticated)) -> SessionContext:
    if session.role != Role.ADMIN:
        logger.warning(f"Non-admin {session.user_id} attempted an admin action")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required"
        )
    return session
