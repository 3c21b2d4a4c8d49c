from enum import Enum
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MembershipStatus(str, Enum):
    """Status stored on a group_memberships row."""
    PENDING = "Pending"
    APPROVED = "Approved"


class GroupStatus(str, Enum):
    """Caller's observable status for a group."""
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"


class GroupCreate(BaseModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class GroupUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class GroupResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    members_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GroupWithStatusResponse(GroupResponse):
    status: GroupStatus = GroupStatus.NONE
    is_member: bool = False


class MembershipResponse(BaseModel):
    id: str
    group_id: str
    user_id: str
    status: MembershipStatus
    created_at: Optional[datetime] = None
    profiles: Optional[dict] = None
    community_groups: Optional[dict] = None

    class Config:
        from_attributes = True


class FallbackMembership(BaseModel):
    group_id: str
    user_id: str
    status: MembershipStatus = MembershipStatus.PENDING


class GroupPostCreate(BaseModel):
    content: str
    parent_id: Optional[str] = None


class GroupPostResponse(BaseModel):
    id: str
    group_id: str
    user_id: str
    parent_id: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None
    profiles: Optional[dict] = None

    class Config:
        from_attributes = True
