import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.middleware import BodySizeLimitMiddleware
from app.db.session import create_db_and_tables

# Import models to ensure they are registered with SQLModel metadata
from app.models.blog import Blog

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s (%s)", settings.PROJECT_NAME, settings.APP_ENV)
    if settings.CREATE_TABLES:
        create_db_and_tables()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="Blog outlines, posts and uploads for the Caskly blog",
)

register_exception_handlers(app)

app.add_middleware(BodySizeLimitMiddleware)

from app.routers import blogs

app.include_router(blogs.router, prefix="/blogs", tags=["blogs"])

def add_cors(app: FastAPI) -> None:
    # CORS only for the local front end; in production both are served from one origin
    if settings.is_production:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

add_cors(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
