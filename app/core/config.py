from typing import Optional
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

class Settings(BaseSettings):
    PROJECT_NAME: str = "Caskly Blog API"
    APP_ENV: str = "development"  # "production" switches on TLS + single-connection pool

    # Database (DATABASE_URL wins, otherwise assembled from the PG* variables)
    DATABASE_URL: Optional[str] = None
    PGHOST: Optional[str] = None
    PGPORT: int = 5432
    PGDATABASE: Optional[str] = None
    PGUSER: Optional[str] = None
    PGPASSWORD: Optional[str] = None
    DB_SCHEMA: str = "app"
    CREATE_TABLES: bool = True

    # Uploads
    UPLOAD_PASSWORD: str = ""
    UPDATE_REQUIRES_PASSWORD: bool = True
    MAX_BODY_BYTES: int = 2 * 1024 * 1024

    # Server
    PORT: int = 3000
    CORS_ORIGIN: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.PGHOST:
            url = URL.create(
                "postgresql+psycopg2",
                username=self.PGUSER,
                password=self.PGPASSWORD,
                host=self.PGHOST,
                port=self.PGPORT,
                database=self.PGDATABASE,
            )
            return url.render_as_string(hide_password=False)
        return "sqlite:///./caskly.db"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
