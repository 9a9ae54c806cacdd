"""Services module exports."""

from cms.services.cache import CacheService, close_cache_service, get_cache_service
from cms.services.content import (
    CONTENT_MODELS,
    ContentService,
    TableSlugExistenceCheck,
    get_content_model,
)
from cms.services.slug import (
    SlugExistenceCheck,
    SlugOptions,
    SlugValidation,
    generate_slug,
    generate_unique_slug,
    validate_slug,
)

__all__ = [
    # Cache
    "CacheService",
    "close_cache_service",
    "get_cache_service",
    # Content
    "CONTENT_MODELS",
    "ContentService",
    "TableSlugExistenceCheck",
    "get_content_model",
    # Slugs
    "SlugExistenceCheck",
    "SlugOptions",
    "SlugValidation",
    "generate_slug",
    "generate_unique_slug",
    "validate_slug",
]
