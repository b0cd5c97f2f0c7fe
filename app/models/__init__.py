# Import all models to register them with SQLModel
from app.models.blog import Blog, OUTLINE_FIELDS, WRITABLE_FIELDS, JSON_FIELDS

__all__ = [
    "Blog",
    "OUTLINE_FIELDS",
    "WRITABLE_FIELDS",
    "JSON_FIELDS",
]
