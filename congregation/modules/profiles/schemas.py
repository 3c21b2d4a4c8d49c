from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from congregation.config.permissions_config import Role


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    phone: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None
    role: Optional[str] = Role.MEMBER.value
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None


class AdminProfileUpdate(ProfileUpdate):
    role: Optional[Role] = None
