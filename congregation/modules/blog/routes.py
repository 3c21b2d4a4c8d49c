from fastapi import APIRouter, Depends
from congregation.modules.blog.schemas import (
    CategoryCreate, CategoryResponse, BlogPostCreate, BlogPostUpdate, BlogPostResponse,
    CommentCreate, CommentResponse
)
from congregation.modules.blog.service import BlogService
from congregation.core.dependencies import get_session, require_admin, require_permission
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List, Optional

router = APIRouter(prefix="/blog", tags=["blog"])


def get_blog_service(gateway: DataGateway = Depends(get_gateway)) -> BlogService:
    return BlogService(gateway)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(service: BlogService = Depends(get_blog_service)):
    return service.list_categories()


@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def create_category(
    category_data: CategoryCreate,
    session: SessionContext = Depends(require_admin),
    service: BlogService = Depends(get_blog_service)
):
    return service.create_category(category_data)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def rename_category(
    category_id: str,
    category_data: CategoryCreate,
    session: SessionContext = Depends(require_admin),
    service: BlogService = Depends(get_blog_service)
):
    return service.rename_category(category_id, category_data)


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    session: SessionContext = Depends(require_admin),
    service: BlogService = Depends(get_blog_service)
):
    service.delete_category(category_id)
    return None


@router.get("/posts", response_model=List[BlogPostResponse])
async def list_posts(
    category: Optional[str] = None,
    session: SessionContext = Depends(get_session),
    service: BlogService = Depends(get_blog_service)
):
    """Published posts, newest first. Writers also see scheduled posts."""
    return service.list_posts(category=category, include_scheduled=session.has_permission("blog:write"))


@router.post("/posts", response_model=BlogPostResponse, status_code=201)
async def create_post(
    post_data: BlogPostCreate,
    session: SessionContext = Depends(require_permission("blog:write")),
    service: BlogService = Depends(get_blog_service)
):
    """Publish now, or schedule with publish_on"""
    return service.create_post(post_data)


@router.get("/posts/{post_id}", response_model=BlogPostResponse)
async def get_post(
    post_id: str,
    session: SessionContext = Depends(get_session),
    service: BlogService = Depends(get_blog_service)
):
    return service.get_post(post_id, include_scheduled=session.has_permission("blog:write"))


@router.put("/posts/{post_id}", response_model=BlogPostResponse)
async def update_post(
    post_id: str,
    post_data: BlogPostUpdate,
    session: SessionContext = Depends(require_permission("blog:write")),
    service: BlogService = Depends(get_blog_service)
):
    return service.update_post(post_id, post_data)


@router.delete("/posts/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    session: SessionContext = Depends(require_permission("blog:delete")),
    service: BlogService = Depends(get_blog_service)
):
    service.delete_post(post_id)
    return None


@router.post("/posts/{post_id}/like", response_model=BlogPostResponse)
async def like_post(post_id: str, service: BlogService = Depends(get_blog_service)):
    return service.like_post(post_id)


@router.get("/posts/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(post_id: str, service: BlogService = Depends(get_blog_service)):
    return service.list_comments(post_id)


@router.post("/posts/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    session: SessionContext = Depends(get_session),
    service: BlogService = Depends(get_blog_service)
):
    return service.add_comment(session, post_id, comment_data)
