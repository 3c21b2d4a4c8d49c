from fastapi import APIRouter, Depends
from congregation.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupResponse, GroupWithStatusResponse,
    MembershipResponse, MembershipStatus, GroupPostCreate, GroupPostResponse
)
from congregation.modules.groups.fallback import FallbackMembershipStore, get_fallback_store
from congregation.modules.groups.membership import MembershipWorkflow
from congregation.modules.groups.service import GroupService
from congregation.core.dependencies import get_session, require_admin, require_authenticated, require_permission
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List

router = APIRouter(prefix="/groups", tags=["groups"])


def get_membership_workflow(
    gateway: DataGateway = Depends(get_gateway),
    fallback_store: FallbackMembershipStore = Depends(get_fallback_store)
) -> MembershipWorkflow:
    return MembershipWorkflow(gateway, fallback_store)


def get_group_service(
    gateway: DataGateway = Depends(get_gateway),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
) -> GroupService:
    return GroupService(gateway, workflow)


@router.get("", response_model=List[GroupWithStatusResponse])
async def list_groups(
    session: SessionContext = Depends(get_session),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """All community groups with the caller's membership status"""
    return workflow.list_groups(session)


@router.post("", response_model=GroupResponse, status_code=201)
async def create_group(
    group_data: GroupCreate,
    session: SessionContext = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    """Create a community group (administrators only)"""
    return service.create_group(group_data)


@router.get("/requests", response_model=List[MembershipResponse])
async def list_membership_requests(
    status: MembershipStatus = MembershipStatus.PENDING,
    session: SessionContext = Depends(require_permission("groups:moderate")),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Membership requests in a status (Pending by default) across all groups"""
    return workflow.list_requests(status)


@router.post("/memberships/{membership_id}/approve", response_model=MembershipResponse)
async def approve_membership(
    membership_id: str,
    session: SessionContext = Depends(require_permission("groups:moderate")),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Approve a pending join request"""
    return workflow.approve(membership_id)


@router.post("/memberships/{membership_id}/decline", status_code=204)
async def decline_membership(
    membership_id: str,
    session: SessionContext = Depends(require_permission("groups:moderate")),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Decline a join request (deletes it)"""
    workflow.decline(membership_id)
    return None


@router.delete("/memberships/{membership_id}", status_code=204)
async def remove_membership(
    membership_id: str,
    session: SessionContext = Depends(require_permission("groups:moderate")),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Remove a member from a group"""
    workflow.remove(membership_id)
    return None


@router.delete("/posts/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    session: SessionContext = Depends(require_authenticated),
    service: GroupService = Depends(get_group_service)
):
    """Delete one of your own posts (administrators may delete any)"""
    service.delete_post(session, post_id)
    return None


@router.get("/{group_id}", response_model=GroupWithStatusResponse)
async def get_group(
    group_id: str,
    session: SessionContext = Depends(get_session),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    return workflow.get_group(session, group_id)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    session: SessionContext = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    return service.update_group(group_id, group_data)


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: str,
    session: SessionContext = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    """Delete group with its memberships and posts (administrators only)"""
    service.delete_group(group_id)
    return None


@router.post("/{group_id}/join", response_model=GroupWithStatusResponse)
def join_group(
    group_id: str,
    session: SessionContext = Depends(get_session),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Request to join a group; the request waits for approval. Sync so overlapping joins run in the threadpool."""
    return workflow.request_to_join(session, group_id)


@router.get("/{group_id}/enter", response_model=GroupWithStatusResponse)
async def enter_group(
    group_id: str,
    session: SessionContext = Depends(get_session),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    """Open a group's feed; refused until the membership is approved"""
    return workflow.enter_group(session, group_id)


@router.get("/{group_id}/members", response_model=List[MembershipResponse])
async def list_members(
    group_id: str,
    session: SessionContext = Depends(require_permission("groups:moderate")),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
):
    return workflow.list_members(group_id)


@router.get("/{group_id}/posts", response_model=List[GroupPostResponse])
async def list_posts(
    group_id: str,
    session: SessionContext = Depends(get_session),
    service: GroupService = Depends(get_group_service)
):
    return service.list_posts(session, group_id)


@router.post("/{group_id}/posts", response_model=GroupPostResponse, status_code=201)
async def create_post(
    group_id: str,
    post_data: GroupPostCreate,
    session: SessionContext = Depends(require_authenticated),
    service: GroupService = Depends(get_group_service)
):
    return service.create_post(session, group_id, post_data)
