"""Slug endpoints used by the dashboard editors."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cms.api.deps import Content, get_current_editor
from cms.api.schemas import (
    SlugCheckResponse,
    SlugGenerateRequest,
    SlugGenerateResponse,
    SlugValidationResponse,
)
from cms.services.slug import SlugOptions, generate_slug, validate_slug

router = APIRouter(
    prefix="/admin",
    tags=["Slugs"],
    dependencies=[Depends(get_current_editor)],
)


@router.get(
    "/slugs/validate",
    response_model=SlugValidationResponse,
    summary="Validate slug format",
)
async def validate(slug: Annotated[str, Query()] = "") -> SlugValidationResponse:
    """Report every format rule the slug breaks."""
    result = validate_slug(slug)
    return SlugValidationResponse(slug=slug, is_valid=result.is_valid, errors=result.errors)


@router.post(
    "/slugs/generate",
    response_model=SlugGenerateResponse,
    summary="Generate a slug",
    responses={
        404: {"description": "Unknown content type"},
        409: {"description": "No free slug found"},
    },
)
async def generate(request: SlugGenerateRequest, content: Content) -> SlugGenerateResponse:
    """
    Generate a slug from free text.

    With **entity**, the slug is made unique within that content type,
    ignoring the row given by **exclude_id**.
    """
    if request.entity is None:
        options = SlugOptions(
            separator=request.separator,
            max_length=request.max_length,
            preserve_case=request.preserve_case,
        )
        return SlugGenerateResponse(slug=generate_slug(request.text, options), unique=False)

    slug = await content.unique_slug(
        request.entity,
        request.text,
        request.exclude_id,
        separator=request.separator,
        max_length=request.max_length,
        preserve_case=request.preserve_case,
    )
    return SlugGenerateResponse(slug=slug, unique=True)


@router.get(
    "/{entity}/check-slug",
    response_model=SlugCheckResponse,
    summary="Check slug availability",
    responses={404: {"description": "Unknown content type"}},
)
async def check_slug(
    entity: str,
    content: Content,
    slug: Annotated[str, Query(min_length=1)],
    exclude_id: Annotated[str | None, Query()] = None,
) -> SlugCheckResponse:
    """
    Check whether a slug is taken within one content type.

    - **exclude_id**: row being edited, so it doesn't collide with itself
    """
    exists = await content.check_slug(entity, slug, exclude_id)
    return SlugCheckResponse(exists=exists, slug=slug)
