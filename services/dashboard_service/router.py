from fastapi import APIRouter, Depends
from libs.auth.dependencies import get_current_user
from libs.auth.directory import UserDirectory, get_user_directory
from libs.auth.models import AuthUser
from services.dashboard_service.repository import DashboardStore, get_dashboard_store
from services.dashboard_service.schemas import DashboardStats
from services.dashboard_service.stats import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    current_user: AuthUser = Depends(get_current_user),
    store: DashboardStore = Depends(get_dashboard_store),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Headline numbers for the dashboard landing page."""
    return await get_dashboard_stats(store, directory)
