"""Project API endpoints."""

from fastapi import APIRouter, Response, status

from cms.api.deps import Content, CurrentEditor
from cms.api.schemas import (
    ProjectCreate,
    ProjectCreatedResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectViewsResponse,
)
from cms.core.logging import get_logger
from cms.services.cache import TTL_PROJECTS_LIST

logger = get_logger(__name__)
router = APIRouter(prefix="/projects", tags=["Projects"])

LISTING_CACHE_CONTROL = (
    f"s-maxage={TTL_PROJECTS_LIST}, stale-while-revalidate={TTL_PROJECTS_LIST}"
)


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List active projects",
)
async def list_projects(content: Content, response: Response) -> ProjectListResponse:
    """
    List active projects, newest first.

    Served from the cache when a fresh listing is available; the response
    may also be cached by the CDN for a short time.
    """
    projects = await content.list_projects()
    response.headers["Cache-Control"] = LISTING_CACHE_CONTROL
    return ProjectListResponse(data=[ProjectResponse.model_validate(p) for p in projects])


@router.post(
    "",
    response_model=ProjectCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses={
        409: {"description": "Slug already exists"},
        422: {"description": "Slug breaks the format rules"},
    },
)
async def create_project(
    project_data: ProjectCreate,
    content: Content,
    editor: CurrentEditor,
) -> ProjectCreatedResponse:
    """
    Create a project.

    - **slug**: optional; generated from the title (and made unique) when omitted
    """
    project = await content.create_project(project_data.model_dump())
    logger.info("Project created via API", project_id=project["id"], editor_id=editor.id)
    return ProjectCreatedResponse(data=ProjectResponse.model_validate(project))


@router.post(
    "/{project_id}/views",
    response_model=ProjectViewsResponse,
    summary="Track a project view",
    responses={404: {"description": "Project not found"}},
)
async def track_project_view(project_id: str, content: Content) -> ProjectViewsResponse:
    """Increment a project's view counter."""
    view_count = await content.increment_project_views(project_id)
    return ProjectViewsResponse(id=project_id, view_count=view_count)
