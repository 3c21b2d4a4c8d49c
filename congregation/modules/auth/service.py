import hashlib
import logging
import time
from supabase import Client
from congregation.config.permissions_config import Role
from congregation.database.gateway import DataGateway, GatewayError
from congregation.database.supabase_client import authorize, create_anon_client
from congregation.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Callable, Dict, Any

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client, client_factory: Callable[[], Client] = create_anon_client):
        self.supabase = supabase
        # sign-in stores the session on the client it runs on, so each call gets its own
        self.client_factory = client_factory

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new member using Supabase Auth and create their profile"""
        auth_client = self.client_factory()
        try:
            auth_response = auth_client.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {
                        "first_name": register_data.first_name,
                        "last_name": register_data.last_name,
                        "phone": register_data.phone,
                        "dob": register_data.dob,
                        "gender": register_data.gender,
                    }
                }
            })
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        user = auth_response.user
        # No session means email confirmation is pending; RLS would reject the profile write
        if not auth_response.session:
            return RegisterResponse(
                user_id=user.id,
                email=user.email or register_data.email,
                message="Check your email to verify your account",
                requires_verification=True
            )

        gateway = DataGateway(authorize(auth_client, auth_response.session.access_token))
        try:
            gateway.execute(
                gateway.table("profiles").upsert({
                    "id": user.id,
                    "email": register_data.email,
                    "first_name": register_data.first_name,
                    "last_name": register_data.last_name,
                    "phone": register_data.phone,
                    "dob": register_data.dob,
                    "gender": register_data.gender,
                    "role": Role.MEMBER.value
                }),
                "Create profile"
            )
        except GatewayError as e:
            logger.error(f"Profile creation failed for {user.id}: {e.message}")

        return RegisterResponse(
            user_id=user.id,
            email=user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate member using Supabase Auth"""
        try:
            auth_response = self.client_factory().auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout member and drop the cached identity for the token"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # revoke this token's session only; the shared client holds no session
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
