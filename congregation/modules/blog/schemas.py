from pydantic import BaseModel
from typing import Optional
import datetime as dt


class CategoryCreate(BaseModel):
    name: str


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class BlogPostCreate(BaseModel):
    title: str
    content: str
    excerpt: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    publish_on: Optional[dt.date] = None  # None publishes immediately


class BlogPostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    publish_on: Optional[dt.date] = None


class BlogPostResponse(BaseModel):
    id: str
    title: str
    content: str
    excerpt: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    likes: int = 0
    comments: int = 0
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: str
    blog_id: str
    user_id: str
    content: str
    created_at: Optional[dt.datetime] = None
    profiles: Optional[dict] = None

    class Config:
        from_attributes = True
