"""Content reads and writes behind the public site and the dashboard.

Listings are served cache-aside through ``CacheService``; writes drop the
listings they make stale. Slugs are resolved per content table through
``TableSlugExistenceCheck``.
"""

from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.core.config import get_settings
from cms.core.exceptions import ConflictError, NotFoundError, ValidationError
from cms.core.logging import get_logger
from cms.db.models import (
    BlogPost,
    CareerCategory,
    CareerPosition,
    Category,
    Partner,
    Project,
    SluggedContent,
)
from cms.services.cache import CacheService
from cms.services.slug import (
    MAX_SLUG_LENGTH,
    ExistsPredicate,
    SlugOptions,
    generate_unique_slug,
    validate_slug,
)

logger = get_logger(__name__)

# Entity names used by the dashboard's slug checks
CONTENT_MODELS: dict[str, type[SluggedContent]] = {
    "project": Project,
    "blog": BlogPost,
    "career": CareerPosition,
    "category": Category,
    "career-category": CareerCategory,
    "partner": Partner,
}


def get_content_model(entity: str) -> type[SluggedContent]:
    """Resolve an entity name to its model.

    Raises:
        NotFoundError: If the entity type is unknown
    """
    try:
        return CONTENT_MODELS[entity]
    except KeyError:
        raise NotFoundError(f"Content type '{entity}'") from None


class TableSlugExistenceCheck:
    """Slug existence scoped to one content table.

    ``exclude_id`` skips the row being edited so it doesn't collide with
    its own slug.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: type[SluggedContent],
        exclude_id: str | None = None,
    ) -> None:
        self.session = session
        self.model = model
        self.exclude_id = exclude_id

    async def exists(self, candidate: str) -> bool:
        query = select(self.model.id).where(self.model.slug == candidate)
        if self.exclude_id:
            query = query.where(self.model.id != self.exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None


def _rule_abiding(check: TableSlugExistenceCheck) -> ExistsPredicate:
    """Treat candidates that break the format rules as taken.

    Reserved or too-short bases such as ``admin`` or ``ai`` then resolve
    to ``admin-1`` and ``ai-1``.
    """

    async def exists(candidate: str) -> bool:
        return not validate_slug(candidate).is_valid or await check.exists(candidate)

    return exists


def _project_to_dict(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "title": project.title,
        "slug": project.slug,
        "client_name": project.client_name,
        "description": project.description,
        "status": project.status,
        "is_featured": project.is_featured,
        "is_active": project.is_active,
        "view_count": project.view_count,
        "created_at": project.created_at,
    }


class ContentService:
    """Content operations for one request's session."""

    def __init__(self, session: AsyncSession, cache: CacheService) -> None:
        self.session = session
        self.cache = cache

    # ========== Projects ==========

    async def list_projects(self) -> list[dict[str, Any]]:
        """Active projects, newest first, served from cache when possible."""
        cached = await self.cache.get_projects_list()
        if cached is not None:
            return cached

        result = await self.session.execute(
            select(Project)
            .where(Project.is_active.is_(True))
            .order_by(Project.created_at.desc())
        )
        projects = [_project_to_dict(p) for p in result.scalars().all()]

        await self.cache.set_projects_list(projects)
        return projects

    async def create_project(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a project, resolving its slug and dropping stale listings.

        Raises:
            ValidationError: If a hand-entered slug breaks the format rules
            ConflictError: If the slug is already taken
        """
        settings = get_settings()
        fields = dict(data)
        slug = fields.pop("slug", None)
        check = TableSlugExistenceCheck(self.session, Project)

        if slug:
            validation = validate_slug(slug)
            if not validation.is_valid:
                raise ValidationError("Invalid slug", {"errors": validation.errors})
            if await check.exists(slug):
                raise ConflictError("Slug already exists", {"slug": slug})
        else:
            max_attempts = settings.slug_max_attempts
            # Leave room for the longest counter suffix within the length limit
            options = SlugOptions(max_length=MAX_SLUG_LENGTH - len(f"-{max_attempts}"))
            slug = await generate_unique_slug(
                fields["title"],
                _rule_abiding(check),
                options,
                max_attempts=max_attempts,
            )

        project = Project(slug=slug, **fields)
        self.session.add(project)
        try:
            await self.session.flush()
        except IntegrityError:
            # Another request took the slug between the check and the insert
            await self.session.rollback()
            raise ConflictError("Slug already exists", {"slug": slug}) from None
        await self.session.refresh(project)
        # Invalidate only after the row is committed
        await self.session.commit()

        logger.info("Project created", project_id=project.id, slug=project.slug)

        await self.cache.invalidate_content_listings()
        return _project_to_dict(project)

    async def increment_project_views(self, project_id: str) -> int:
        """Bump a project's view counter and return the new value.

        Raises:
            NotFoundError: If the project doesn't exist
        """
        result = await self.session.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(view_count=Project.view_count + 1)
            .returning(Project.view_count)
            .execution_options(synchronize_session=False)
        )
        view_count = result.scalar_one_or_none()
        if view_count is None:
            raise NotFoundError("Project")
        return view_count

    # ========== Dashboard ==========

    async def dashboard_summary(self) -> dict[str, Any]:
        """Active row counts per content type, served from cache when possible."""
        cached = await self.cache.get_dashboard_summary()
        if cached is not None:
            return cached

        counts: dict[str, int] = {}
        for entity, model in CONTENT_MODELS.items():
            result = await self.session.execute(
                select(func.count()).select_from(model).where(model.is_active.is_(True))
            )
            counts[entity] = result.scalar_one()

        summary = {"counts": counts, "total": sum(counts.values())}
        await self.cache.set_dashboard_summary(summary)
        return summary

    # ========== Slugs ==========

    async def check_slug(self, entity: str, slug: str, exclude_id: str | None = None) -> bool:
        """Whether ``slug`` is taken within ``entity``'s table."""
        model = get_content_model(entity)
        return await TableSlugExistenceCheck(self.session, model, exclude_id).exists(slug)

    async def unique_slug(
        self,
        entity: str,
        text: str,
        exclude_id: str | None = None,
        **options: Any,
    ) -> str:
        """Generate a slug from ``text`` that is free within ``entity``'s table."""
        model = get_content_model(entity)
        return await generate_unique_slug(
            text,
            TableSlugExistenceCheck(self.session, model, exclude_id),
            SlugOptions(**options),
            max_attempts=get_settings().slug_max_attempts,
        )
