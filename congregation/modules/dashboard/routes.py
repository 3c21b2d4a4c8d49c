from fastapi import APIRouter, Depends
from congregation.modules.dashboard.schemas import OverviewResponse, HomeFeedResponse
from congregation.modules.dashboard.service import DashboardService
from congregation.modules.groups.routes import get_membership_workflow
from congregation.modules.groups.membership import MembershipWorkflow
from congregation.core.dependencies import require_permission
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(
    gateway: DataGateway = Depends(get_gateway),
    workflow: MembershipWorkflow = Depends(get_membership_workflow)
) -> DashboardService:
    return DashboardService(gateway, workflow)


@router.get("/home", response_model=HomeFeedResponse)
async def home_feed(service: DashboardService = Depends(get_dashboard_service)):
    """Latest sermon, recent blog posts and upcoming events"""
    return service.home_feed()


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    session: SessionContext = Depends(require_permission("dashboard:read")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Administrative counts and the pending join requests"""
    return service.overview()
