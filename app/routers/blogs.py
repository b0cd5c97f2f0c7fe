from typing import Any, Optional
from datetime import datetime
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from app.core.config import settings
from app.core.security import verify_upload_password
from app.db.session import QueryExecutor, get_executor
from app.services.blog import BlogService

router = APIRouter()


class BlogFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slug: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    content_md: Optional[str] = None
    content_html: Optional[str] = None
    cover_image_url: Optional[str] = None
    cover_image_alt: Optional[str] = None
    status: Optional[str] = None
    reading_time_minutes: Optional[int] = None
    published_at: Optional[datetime] = None
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
    faq_json: Optional[Any] = None  # JSON text or a JSON structure
    schema_document: Optional[Any] = Field(None, alias="schema_json")
    upload_password: Optional[str] = None


class BlogCreate(BlogFields):
    pass


class BlogUpdate(BlogFields):
    pass


def get_blog_service(executor: QueryExecutor = Depends(get_executor)) -> BlogService:
    return BlogService(executor)


@router.get("/")
def list_blog_outlines(
    status: str = "published",
    limit: str = "20",
    offset: str = "0",
    search: str = "",
    service: BlogService = Depends(get_blog_service),
):
    """List published (or ``status``-filtered) posts without body content"""
    return {"items": service.list_outlines(status=status, limit=limit, offset=offset, search=search)}


@router.get("/{slug}")
def read_blog(slug: str, service: BlogService = Depends(get_blog_service)):
    return {"item": service.get_by_slug(slug)}


@router.post("/", status_code=201)
def create_blog(blog: BlogCreate, service: BlogService = Depends(get_blog_service)):
    """Create a post. Requires the shared upload password."""
    verify_upload_password(blog.upload_password)
    data = blog.model_dump(by_alias=True, exclude={"upload_password"})
    return {"item": service.create(data)}


@router.put("/{blog_id}")
def update_blog(blog_id: int, blog: BlogUpdate, service: BlogService = Depends(get_blog_service)):
    """Update only the fields present in the request body"""
    if settings.UPDATE_REQUIRES_PASSWORD:
        verify_upload_password(blog.upload_password)
    data = blog.model_dump(by_alias=True, exclude_unset=True, exclude={"upload_password"})
    return {"item": service.update(blog_id, data)}
