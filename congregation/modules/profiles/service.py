from congregation.core.errors import raise_http_error
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.profiles.schemas import ProfileResponse, ProfileUpdate, AdminProfileUpdate
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by ID"""
        try:
            result = self.gateway.execute(
                self.gateway.table("profiles").select("*").eq("id", user_id).limit(1),
                "Load profile"
            )
        except GatewayError as e:
            raise_http_error(e, "Load profile")
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**result.data[0])

    def list_profiles(self, limit: int = 50, offset: int = 0) -> List[ProfileResponse]:
        """Member directory, newest members first"""
        try:
            result = self.gateway.execute(
                self.gateway.table("profiles")
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .offset(offset),
                "List members"
            )
        except GatewayError as e:
            raise_http_error(e, "List members")
        return [ProfileResponse(**profile) for profile in result.data or []]

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update profile fields; role changes only arrive through AdminProfileUpdate"""
        update_data = profile_data.model_dump(exclude_none=True, mode="json")
        if not update_data:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.gateway.execute(
                self.gateway.table("profiles").update(update_data).eq("id", user_id),
                "Update member"
            )
        except GatewayError as e:
            raise_http_error(e, "Update member")
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        if isinstance(profile_data, AdminProfileUpdate) and profile_data.role is not None:
            logger.info(f"Role of {user_id} set to {profile_data.role.value}")
        return ProfileResponse(**result.data[0])

    def delete_profile(self, user_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("profiles").delete().eq("id", user_id),
                "Delete member"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete member")
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        logger.info(f"Deleted profile {user_id}")
        return True
