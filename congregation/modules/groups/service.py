from congregation.core.errors import raise_http_error
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.groups.membership import MEMBERSHIPS_TABLE, MembershipWorkflow
from congregation.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupResponse, GroupPostCreate, GroupPostResponse
)
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, gateway: DataGateway, workflow: MembershipWorkflow):
        self.gateway = gateway
        self.workflow = workflow

    def create_group(self, group_data: GroupCreate) -> GroupResponse:
        """Create a new community group"""
        try:
            result = self.gateway.execute(
                self.gateway.table("community_groups").insert({
                    "name": group_data.name,
                    "description": group_data.description,
                    "image_url": group_data.image_url,
                }),
                "Create group"
            )
        except GatewayError as e:
            raise_http_error(e, "Create group")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create group")
        return GroupResponse(**result.data[0])

    def update_group(self, group_id: str, group_data: GroupUpdate) -> GroupResponse:
        """Update group"""
        update_data = group_data.model_dump(exclude_none=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.gateway.execute(
                self.gateway.table("community_groups").update(update_data).eq("id", group_id),
                "Update group"
            )
        except GatewayError as e:
            raise_http_error(e, "Update group")
        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        return GroupResponse(**result.data[0])

    def delete_group(self, group_id: str) -> bool:
        """Delete group together with its memberships and posts"""
        for table in (MEMBERSHIPS_TABLE, "group_posts"):
            try:
                self.gateway.execute(
                    self.gateway.table(table).delete().eq("group_id", group_id),
                    f"Delete {table}"
                )
            except GatewayError as e:
                if not e.is_collection_unavailable:
                    raise_http_error(e, "Delete group")
        try:
            result = self.gateway.execute(
                self.gateway.table("community_groups").delete().eq("id", group_id),
                "Delete group"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete group")
        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        logger.info(f"Deleted group {group_id}")
        return True

    def list_posts(self, session: SessionContext, group_id: str) -> List[GroupPostResponse]:
        """Group feed, newest first. Approved members only."""
        self.workflow.enter_group(session, group_id)
        try:
            result = self.gateway.execute(
                self.gateway.table("group_posts")
                .select("*, profiles(first_name, last_name, avatar_url)")
                .eq("group_id", group_id)
                .order("created_at", desc=True),
                "Load group posts"
            )
        except GatewayError as e:
            raise_http_error(e, "Load group posts")
        return [GroupPostResponse(**post) for post in result.data or []]

    def create_post(self, session: SessionContext, group_id: str, post_data: GroupPostCreate) -> GroupPostResponse:
        self.workflow.enter_group(session, group_id)
        content = post_data.content.strip()
        if not content:
            raise HTTPException(status_code=400, detail="Post content cannot be empty")
        try:
            result = self.gateway.execute(
                self.gateway.table("group_posts").insert({
                    "group_id": group_id,
                    "user_id": session.user_id,
                    "parent_id": post_data.parent_id,
                    "content": content,
                }),
                "Create post"
            )
        except GatewayError as e:
            raise_http_error(e, "Create post")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create post")
        return GroupPostResponse(**result.data[0])

    def delete_post(self, session: SessionContext, post_id: str) -> bool:
        """Authors delete their own posts; administrators delete any post"""
        query = self.gateway.table("group_posts").delete().eq("id", post_id)
        if not session.is_admin:
            query = query.eq("user_id", session.user_id)
        try:
            result = self.gateway.execute(query, "Delete post")
        except GatewayError as e:
            raise_http_error(e, "Delete post")
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return True
