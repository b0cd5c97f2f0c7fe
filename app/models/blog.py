from typing import Optional, Any
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON, Text, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from app.core.config import settings

# JSONB on PostgreSQL, plain JSON on SQLite
JsonDocument = JSON().with_variant(JSONB(), "postgresql")

# Columns returned by the list endpoint (no body content)
OUTLINE_FIELDS = (
    "id",
    "slug",
    "title",
    "subtitle",
    "excerpt",
    "category",
    "cover_image_url",
    "cover_image_alt",
    "reading_time_minutes",
    "status",
    "published_at",
    "created_at",
    "updated_at",
    "focus_phrase",
    "meta_description",
)

# Columns a client may write through create/update, in insert order
WRITABLE_FIELDS = (
    "slug",
    "title",
    "subtitle",
    "excerpt",
    "category",
    "content_md",
    "content_html",
    "cover_image_url",
    "cover_image_alt",
    "status",
    "reading_time_minutes",
    "published_at",
    "focus_phrase",
    "keywords",
    "meta_title",
    "meta_description",
    "canonical_url",
    "og_title",
    "og_description",
    "og_image_url",
    "twitter_title",
    "twitter_description",
    "twitter_image_url",
    "faq_json",
    "schema_json",
)

JSON_FIELDS = ("faq_json", "schema_json")


class Blog(SQLModel, table=True):
    __tablename__ = "blogs"
    __table_args__ = {"schema": settings.DB_SCHEMA or None}

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(unique=True, index=True)  # URL-friendly identifier

    # Content
    title: Optional[str] = None
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    content_md: Optional[str] = Field(default=None, sa_column=Column(Text))
    content_html: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Presentation
    cover_image_url: Optional[str] = None
    cover_image_alt: Optional[str] = None
    reading_time_minutes: Optional[int] = None

    # Status
    status: str = Field(default="draft", index=True)
    published_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True)))

    # SEO
    focus_phrase: Optional[str] = None
    keywords: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical_url: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image_url: Optional[str] = None
    twitter_title: Optional[str] = None
    twitter_description: Optional[str] = None
    twitter_image_url: Optional[str] = None

    # Structured data
    faq_json: Optional[Any] = Field(default=None, sa_column=Column(JsonDocument))
    # "schema_json" would shadow a pydantic BaseModel method
    schema_document: Optional[Any] = Field(default=None, sa_column=Column("schema_json", JsonDocument))

    # Timestamps (maintained by storage)
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
    )
