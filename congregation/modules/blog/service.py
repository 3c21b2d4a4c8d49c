import datetime as dt
import logging
from typing import List, Optional

from fastapi import HTTPException

from congregation.config import settings
from congregation.core.errors import raise_http_error
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.blog.schemas import (
    CategoryCreate, CategoryResponse, BlogPostCreate, BlogPostUpdate, BlogPostResponse,
    CommentCreate, CommentResponse
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"


def resolve_publish_time(publish_on: Optional[dt.date], now: Optional[dt.datetime] = None) -> dt.datetime:
    """Publication timestamp: now, or midnight UTC of a date within the scheduling window."""
    now = now or dt.datetime.now(dt.timezone.utc)
    if publish_on is None or publish_on == now.date():
        return now
    if publish_on < now.date():
        raise HTTPException(status_code=400, detail="Publish date cannot be in the past")
    if publish_on > now.date() + dt.timedelta(days=settings.blog_schedule_max_days):
        raise HTTPException(
            status_code=400,
            detail=f"Posts can be scheduled at most {settings.blog_schedule_max_days} days ahead"
        )
    return dt.datetime.combine(publish_on, dt.time.min, tzinfo=dt.timezone.utc)


class BlogService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    # Categories

    def list_categories(self) -> List[CategoryResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_categories").select("*").order("name"),
                "List categories"
            )
        except GatewayError as e:
            raise_http_error(e, "List categories")
        return [CategoryResponse(**category) for category in result.data or []]

    def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        name = category_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Category name is required")
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_categories").insert({"name": name}),
                "Create category"
            )
        except GatewayError as e:
            raise_http_error(e, "Create category")
        return CategoryResponse(**result.data[0])

    def rename_category(self, category_id: str, category_data: CategoryCreate) -> CategoryResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_categories").update({"name": category_data.name.strip()}).eq("id", category_id),
                "Rename category"
            )
        except GatewayError as e:
            raise_http_error(e, "Rename category")
        if not result.data:
            raise HTTPException(status_code=404, detail="Category not found")
        return CategoryResponse(**result.data[0])

    def delete_category(self, category_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_categories").delete().eq("id", category_id),
                "Delete category"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete category")
        if not result.data:
            raise HTTPException(status_code=404, detail="Category not found")
        return True

    # Posts

    def list_posts(
        self,
        category: Optional[str] = None,
        include_scheduled: bool = False,
        limit: Optional[int] = None
    ) -> List[BlogPostResponse]:
        """Posts newest first; scheduled posts only when include_scheduled"""
        query = self.gateway.table("blog_posts").select("*")
        if category:
            query = query.eq("category", category)
        if not include_scheduled:
            query = query.lte("created_at", dt.datetime.now(dt.timezone.utc).isoformat())
        query = query.order("created_at", desc=True)
        if limit:
            query = query.limit(limit)
        try:
            result = self.gateway.execute(query, "List posts")
        except GatewayError as e:
            raise_http_error(e, "List posts")
        return [BlogPostResponse(**post) for post in result.data or []]

    def get_post(self, post_id: str, include_scheduled: bool = False) -> BlogPostResponse:
        """A single post; a scheduled post is not found until it is published unless include_scheduled"""
        query = self.gateway.table("blog_posts").select("*").eq("id", post_id)
        if not include_scheduled:
            query = query.lte("created_at", dt.datetime.now(dt.timezone.utc).isoformat())
        try:
            result = self.gateway.execute(query.limit(1), "Load post")
        except GatewayError as e:
            raise_http_error(e, "Load post")
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return BlogPostResponse(**result.data[0])

    def create_post(self, post_data: BlogPostCreate) -> BlogPostResponse:
        if not post_data.title.strip() or not post_data.content.strip():
            raise HTTPException(status_code=400, detail="Please fill in title and content")
        payload = post_data.model_dump(exclude={"publish_on"})
        payload["category"] = post_data.category or DEFAULT_CATEGORY
        payload["created_at"] = resolve_publish_time(post_data.publish_on).isoformat()
        payload["likes"] = 0
        payload["comments"] = 0
        try:
            result = self.gateway.execute(self.gateway.table("blog_posts").insert(payload), "Save post")
        except GatewayError as e:
            raise_http_error(e, "Save post")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save post")
        return BlogPostResponse(**result.data[0])

    def update_post(self, post_id: str, post_data: BlogPostUpdate) -> BlogPostResponse:
        payload = post_data.model_dump(exclude_none=True, exclude={"publish_on"})
        if post_data.publish_on is not None:
            payload["created_at"] = resolve_publish_time(post_data.publish_on).isoformat()
        if not payload:
            raise HTTPException(status_code=400, detail="Nothing to update")
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_posts").update(payload).eq("id", post_id),
                "Save post"
            )
        except GatewayError as e:
            raise_http_error(e, "Save post")
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return BlogPostResponse(**result.data[0])

    def delete_post(self, post_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_posts").delete().eq("id", post_id),
                "Delete post"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete post")
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return True

    def like_post(self, post_id: str) -> BlogPostResponse:
        # read then write: concurrent likes on one post can overwrite each other
        post = self.get_post(post_id)
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_posts").update({"likes": post.likes + 1}).eq("id", post_id),
                "Like post"
            )
        except GatewayError as e:
            raise_http_error(e, "Like post")
        return BlogPostResponse(**result.data[0]) if result.data else post

    # Comments

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_comments")
                .select("*, profiles(first_name, last_name)")
                .eq("blog_id", post_id)
                .order("created_at", desc=True),
                "Load comments"
            )
        except GatewayError as e:
            raise_http_error(e, "Load comments")
        return [CommentResponse(**comment) for comment in result.data or []]

    def add_comment(self, session: SessionContext, post_id: str, comment_data: CommentCreate) -> CommentResponse:
        if not session.is_authenticated:
            raise HTTPException(status_code=401, detail="Please login to comment")
        content = comment_data.content.strip()
        if not content:
            raise HTTPException(status_code=400, detail="Comment cannot be empty")
        try:
            result = self.gateway.execute(
                self.gateway.table("blog_comments").insert({
                    "blog_id": post_id,
                    "user_id": session.user_id,
                    "content": content,
                }),
                "Post comment"
            )
        except GatewayError as e:
            raise_http_error(e, "Post comment")
        return CommentResponse(**result.data[0])
