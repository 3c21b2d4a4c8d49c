from fastapi import APIRouter, Depends, HTTPException
from congregation.modules.profiles.schemas import ProfileResponse, ProfileUpdate, AdminProfileUpdate
from congregation.modules.profiles.service import ProfileService
from congregation.core.dependencies import require_admin, require_authenticated
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(gateway: DataGateway = Depends(get_gateway)) -> ProfileService:
    return ProfileService(gateway)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(session: SessionContext = Depends(require_authenticated)):
    """Caller's profile (a default member profile until the row exists)"""
    return session.profile


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    session: SessionContext = Depends(require_authenticated),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(session.user_id, profile_data)


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    limit: int = 50,
    offset: int = 0,
    session: SessionContext = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Member directory (administrators only)"""
    return service.list_profiles(limit=limit, offset=offset)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    session: SessionContext = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(user_id)


@router.put("/{user_id}", response_model=ProfileResponse)
async def update_profile(
    user_id: str,
    profile_data: AdminProfileUpdate,
    session: SessionContext = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Edit a member, including their role"""
    return service.update_profile(user_id, profile_data)


@router.delete("/{user_id}", status_code=204)
async def delete_profile(
    user_id: str,
    session: SessionContext = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    if user_id == session.user_id:
        raise HTTPException(status_code=400, detail="Administrators cannot delete their own profile")
    service.delete_profile(user_id)
    return None
