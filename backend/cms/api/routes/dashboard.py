"""Dashboard summary endpoint."""

from fastapi import APIRouter

from cms.api.deps import Content, CurrentEditor
from cms.api.schemas import DashboardResponse, DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Dashboard summary",
)
async def dashboard_summary(content: Content, editor: CurrentEditor) -> DashboardResponse:
    """Active content counts per type, cached briefly."""
    summary = await content.dashboard_summary()
    return DashboardResponse(data=DashboardSummary.model_validate(summary))
