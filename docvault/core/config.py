from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # FastAPI Configuration
    PROJECT_NAME: str = "DocVault API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    DOCS_ENABLED: bool = Field(
        default=True, description="Serve interactive API docs at /api-docs"
    )
    ENVIRONMENT: str = "development"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./docvault.db",
        description="SQLAlchemy async connection URL (postgresql+asyncpg://... in production)",
    )

    # Connection Pool Settings (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    DB_ECHO: bool = False  # SQL query logging

    # Staging Area Configuration
    STAGING_DIR: str = Field(
        default="uploads",
        description="Local directory where uploaded payloads are written",
    )

    # Document Acceptance Policy
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB in bytes
    ALLOWED_CONTENT_TYPE: str = "application/pdf"
    UPLOAD_CHUNK_SIZE: int = 64 * 1024

    DISCARD_REJECTED_UPLOADS: bool = Field(
        default=True,
        description="Remove staged bytes when parsing fails or the owner does not exist",
    )

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(
        default=10, description="Page size used when 'limit' is missing or invalid"
    )

    @field_validator("MAX_FILE_SIZE", "UPLOAD_CHUNK_SIZE", "DEFAULT_PAGE_SIZE")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sizes and page defaults must be positive."""
        if v <= 0:
            raise ValueError("Value must be a positive integer")
        return v

    # CORS Settings
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Additional CORS Origins (comma-separated string)
    ADDITIONAL_CORS_ORIGINS: Optional[str] = None

    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = [
        "Content-Type",
        "X-Requested-With",
        "Accept",
        "Origin",
        "Cache-Control",
        "X-File-Name",
    ]

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def resolved_cors_origins(self) -> List[str]:
        """Get CORS origins, defaults first, without duplicates."""
        origins = list(self.CORS_ORIGINS)

        if self.ADDITIONAL_CORS_ORIGINS:
            origins.extend(
                origin.strip() for origin in self.ADDITIONAL_CORS_ORIGINS.split(",")
            )

        seen = set()
        unique_origins = []
        for origin in origins:
            if origin and origin not in seen:
                seen.add(origin)
                unique_origins.append(origin)

        return unique_origins

    @property
    def is_development(self) -> bool:
        """Check if the application is running in development mode."""
        return self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production mode."""
        return self.ENVIRONMENT.lower() in ["production", "prod"]


# Global settings instance
settings = Settings()
