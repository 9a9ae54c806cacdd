"""URL slug generation, uniqueness resolution and validation.

Slugs are derived from titles when content is created and re-validated
whenever an editor types one by hand. Uniqueness is resolved against an
existence check supplied by the caller, usually a query scoped to one
content table.
"""

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from cms.core.exceptions import SlugExhaustedError
from cms.core.logging import get_logger

logger = get_logger(__name__)

FALLBACK_SLUG = "untitled"
MIN_SLUG_LENGTH = 3
MAX_SLUG_LENGTH = 60
DEFAULT_MAX_ATTEMPTS = 100
RESERVED_SLUGS = frozenset({"new", "edit", "delete", "admin", "dashboard", "api"})

_INVALID_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_RUNS = re.compile(r"[\s_-]+", re.ASCII)
_VALID_SLUG = re.compile(r"[a-z0-9-]+")
# Separators must not be confused with slug content
_SEPARATOR_FORBIDDEN = re.compile(r"[A-Za-z0-9\s]")


@dataclass(frozen=True)
class SlugOptions:
    """How free text is turned into a slug."""

    separator: str = "-"
    max_length: int = MAX_SLUG_LENGTH
    preserve_case: bool = False

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if _SEPARATOR_FORBIDDEN.search(self.separator):
            raise ValueError("separator must not contain letters, digits or whitespace")
        if self.max_length < 1:
            raise ValueError("max_length must be positive")


@dataclass(frozen=True)
class SlugValidation:
    """Every rule a slug violates, in rule order."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class SlugExistenceCheck(Protocol):
    """Answers whether a candidate slug is already taken."""

    async def exists(self, candidate: str) -> bool: ...


ExistsPredicate = Callable[[str], Awaitable[bool]]


def _trim_separators(slug: str, separator: str) -> str:
    sep = re.escape(separator)
    return re.sub(f"^(?:{sep})+|(?:{sep})+$", "", slug)


def generate_slug(text: str, options: SlugOptions | None = None) -> str:
    """Turn free text into a URL slug.

    Characters outside ASCII letters, digits, whitespace, ``_`` and ``-``
    are dropped, and runs of whitespace, underscores and hyphens collapse
    into one separator. Over-long slugs are cut at ``max_length`` and the
    trailing partial word is dropped. Returns ``"untitled"`` when nothing
    usable is left.
    """
    options = options or SlugOptions()
    separator = options.separator

    slug = (text or "").strip()
    if not options.preserve_case:
        slug = slug.lower()

    slug = _INVALID_CHARS.sub("", slug)
    slug = _SEPARATOR_RUNS.sub(lambda _: separator, slug)
    slug = _trim_separators(slug, separator)

    if len(slug) > options.max_length:
        truncated = slug[:options.max_length]
        # The cut fell inside a word unless the next thing is a separator
        if not slug[options.max_length:].startswith(separator):
            head, found, _ = truncated.rpartition(separator)
            if found:
                truncated = head
        slug = _trim_separators(truncated, separator)

    return slug or FALLBACK_SLUG


def _as_predicate(exists_check: SlugExistenceCheck | ExistsPredicate) -> ExistsPredicate:
    if callable(exists_check):
        return exists_check
    return exists_check.exists


async def generate_unique_slug(
    base_text: str,
    exists_check: SlugExistenceCheck | ExistsPredicate,
    options: SlugOptions | None = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Generate a slug from ``base_text`` that ``exists_check`` reports free.

    Taken candidates are retried as ``{slug}-1``, ``{slug}-2`` and so on.
    Errors raised by the existence check propagate unchanged.

    Raises:
        SlugExhaustedError: If ``max_attempts`` candidates were all taken.
    """
    exists = _as_predicate(exists_check)
    base_slug = generate_slug(base_text, options)
    candidate = base_slug

    for counter in range(1, max_attempts + 1):
        if not await exists(candidate):
            return candidate
        logger.debug("Slug taken", candidate=candidate, attempt=counter)
        candidate = f"{base_slug}-{counter}"

    logger.warning("Slug candidates exhausted", slug=base_slug, attempts=max_attempts)
    raise SlugExhaustedError(base_slug, max_attempts)


def validate_slug(slug: str) -> SlugValidation:
    """Check a hand-entered slug against the format rules.

    All violated rules are reported, not just the first one.
    """
    errors: list[str] = []

    if not slug:
        errors.append("Slug is required")
        return SlugValidation(errors)

    if len(slug) < MIN_SLUG_LENGTH:
        errors.append(f"Slug must be at least {MIN_SLUG_LENGTH} characters long")

    if len(slug) > MAX_SLUG_LENGTH:
        errors.append(f"Slug must be at most {MAX_SLUG_LENGTH} characters long")

    if not _VALID_SLUG.fullmatch(slug):
        errors.append("Slug can only contain lowercase letters, numbers, and hyphens")

    if slug.startswith("-") or slug.endswith("-"):
        errors.append("Slug cannot start or end with hyphens")

    if "--" in slug:
        errors.append("Slug cannot contain consecutive hyphens")

    if slug in RESERVED_SLUGS:
        errors.append("Slug cannot be a reserved word")

    return SlugValidation(errors)
