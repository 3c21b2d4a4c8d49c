from pydantic import BaseModel
from typing import List, Optional

from congregation.modules.blog.schemas import BlogPostResponse
from congregation.modules.events.schemas import EventResponse
from congregation.modules.groups.schemas import MembershipResponse
from congregation.modules.sermons.schemas import SermonResponse


class OverviewResponse(BaseModel):
    members: int = 0
    blogs: int = 0
    sermons: int = 0
    events: int = 0
    pending_requests: int = 0
    pending_members: List[MembershipResponse] = []


class HomeFeedResponse(BaseModel):
    latest_sermon: Optional[SermonResponse] = None
    recent_posts: List[BlogPostResponse] = []
    upcoming_events: List[EventResponse] = []
