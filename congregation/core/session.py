"""
Session resolution: identity -> role + profile.

Endpoints receive a SessionContext instead of asking the Supabase client who
is logged in, so every workflow can be driven with a fixed identity.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from congregation.config import settings
from congregation.config.permissions_config import Role, get_role_permissions
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.profiles.schemas import ProfileResponse

logger = logging.getLogger(__name__)


class SessionContext(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Role = Role.GUEST
    profile: Optional[ProfileResponse] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def permissions(self) -> List[str]:
        return get_role_permissions(self.role)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    @classmethod
    def guest(cls) -> "SessionContext":
        return cls()


def _coerce_role(value: Any) -> Role:
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).upper())
    except ValueError:
        return Role.MEMBER


def default_profile(user_id: str, email: Optional[str], metadata: Dict[str, Any]) -> ProfileResponse:
    """Profile used until the profiles row exists (sign-up without a session)."""
    return ProfileResponse(
        id=user_id,
        email=email,
        first_name=metadata.get("first_name") or metadata.get("firstName") or "",
        last_name=metadata.get("last_name") or metadata.get("lastName") or "",
        phone=metadata.get("phone"),
        dob=metadata.get("dob"),
        gender=metadata.get("gender"),
        role=Role.MEMBER.value,
    )


def load_profile(gateway: DataGateway, user_id: str) -> Optional[ProfileResponse]:
    result = gateway.execute(
        gateway.table("profiles").select("*").eq("id", user_id).limit(1),
        "Load profile",
    )
    if not result.data:
        return None
    return ProfileResponse(**result.data[0])


def resolve_session(user_data: Optional[Dict[str, Any]], gateway: DataGateway) -> SessionContext:
    """Build the SessionContext for an authenticated identity (or a guest)."""
    if not user_data:
        return SessionContext.guest()

    user_id = user_data["id"]
    email = user_data.get("email")
    profile = None
    try:
        profile = load_profile(gateway, user_id)
    except GatewayError as e:
        logger.warning(f"Profile lookup failed for {user_id}, using default profile: {e.message}")

    if profile is None:
        logger.info(f"Profile not found for {user_id}, falling back to default member profile")
        profile = default_profile(user_id, email, user_data.get("user_metadata") or {})

    role = _coerce_role(profile.role)
    if email and email.lower() in settings.get_admin_emails():
        role = Role.ADMIN

    return SessionContext(
        user_id=user_id,
        email=email or profile.email,
        role=role,
        profile=profile,
    )
