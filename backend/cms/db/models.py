"""SQLAlchemy ORM models for slug-addressed site content."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SluggedContent:
    """Columns shared by every content table addressed by slug.

    ``slug`` is unique per table; the constraint backs up the
    generation-time uniqueness check against concurrent creates.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, slug={self.slug})>"


class Project(SluggedContent, Base):
    """Portfolio project shown on the public site."""

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_active_created", "is_active", "created_at"),
    )

    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="completed", nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class BlogPost(SluggedContent, Base):
    """Blog article."""

    __tablename__ = "blog_posts"


class CareerPosition(SluggedContent, Base):
    """Open position on the careers page."""

    __tablename__ = "career_positions"


class Category(SluggedContent, Base):
    """Blog category."""

    __tablename__ = "categories"


class CareerCategory(SluggedContent, Base):
    """Grouping for career positions."""

    __tablename__ = "career_categories"


class Partner(SluggedContent, Base):
    """Partner or client logo entry."""

    __tablename__ = "partners"
