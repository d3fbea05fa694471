"""Application configuration management."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="recruit_crm", description="PostgreSQL database name")
    postgres_user: str = Field(default="crm_user", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")
    rls_role: str = Field(default="crm_authenticated", description="Database role row-level-security policies apply to")
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Full SQLAlchemy URL, takes precedence over the postgres_* components"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    secret_key: str = Field(default="dev-secret-key", description="JWT secret key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=30, description="Token expiry minutes")

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")

    # Candidate search
    search_default_limit: int = Field(default=100, description="Default page size for candidate search")
    search_max_limit: int = Field(default=500, description="Largest page size accepted for candidate search")

    # Dashboard
    recent_activity_limit: int = Field(default=5, description="Activities shown on the dashboard")
    followup_active_days: int = Field(default=7, description="Days without activity before an active seeker needs a follow-up")
    stale_candidate_days: int = Field(default=30, description="Days without activity before any candidate needs a check-in")
    client_nurture_days: int = Field(default=60, description="Days without activity before a client contact needs nurturing")
    max_recommendations: int = Field(default=10, description="Maximum recommended actions on the dashboard")

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


# Global settings instance
settings = Settings()
