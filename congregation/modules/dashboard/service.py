import logging

from fastapi import HTTPException

from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.blog.service import BlogService
from congregation.modules.dashboard.schemas import OverviewResponse, HomeFeedResponse
from congregation.modules.events.service import EventService
from congregation.modules.groups.membership import MembershipWorkflow
from congregation.modules.sermons.service import SermonService

logger = logging.getLogger(__name__)

HOME_POST_COUNT = 3
HOME_EVENT_COUNT = 3


class DashboardService:
    def __init__(self, gateway: DataGateway, workflow: MembershipWorkflow):
        self.gateway = gateway
        self.workflow = workflow

    def count(self, table: str) -> int:
        """Exact row count of a table; 0 when it cannot be read"""
        try:
            result = self.gateway.execute(
                self.gateway.table(table).select("id", count="exact").limit(1),
                f"Count {table}"
            )
        except GatewayError as e:
            logger.warning(f"Could not count {table}: {e.message}")
            return 0
        return result.count or 0

    def overview(self) -> OverviewResponse:
        pending = self.workflow.list_requests()
        return OverviewResponse(
            members=self.count("profiles"),
            blogs=self.count("blog_posts"),
            sermons=self.count("sermons"),
            events=self.count("events"),
            pending_requests=len(pending),
            pending_members=pending,
        )

    def home_feed(self) -> HomeFeedResponse:
        recent_posts = []
        try:
            recent_posts = BlogService(self.gateway).list_posts(limit=HOME_POST_COUNT)
        except HTTPException as e:
            logger.warning(f"Home feed without blog posts: {e.detail}")
        return HomeFeedResponse(
            latest_sermon=SermonService(self.gateway).latest_sermon(),
            recent_posts=recent_posts,
            upcoming_events=EventService(self.gateway).upcoming_events(HOME_EVENT_COUNT),
        )
