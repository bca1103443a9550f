"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="training-admin", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )

    # Authentication
    auth_secret_key: str = Field(
        default="dev-jwt-secret-key-change-in-production-32chars!",
        description="JWT signing key (min 32 chars)",
    )
    auth_algorithm: str = Field(default="HS256", description="JWT algorithm")
    auth_access_token_expire_minutes: int = Field(
        default=30, description="Access token expiration (minutes)"
    )
    auth_refresh_token_expire_days: int = Field(
        default=7, description="Refresh token expiration (days)"
    )
    auth_cookie_secure: bool = Field(
        default=False, description="Secure cookie (HTTPS only)"
    )
    auth_cookie_httponly: bool = Field(
        default=True, description="HttpOnly cookie (no JS access)"
    )
    auth_cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax", description="SameSite cookie policy"
    )
    auth_cookie_name: str = Field(
        default="training_admin_refresh_token", description="Refresh token cookie name"
    )
    auth_cookie_path: str = Field(
        default="/v1/auth", description="Path scope of the refresh token cookie"
    )
    auth_allow_signup: bool = Field(
        default=True, description="Allow new admin accounts to sign up"
    )

    # State storage
    storage_backend: Literal["file", "cassandra"] = Field(
        default="file", description="Where the state document is persisted"
    )
    state_dir: str = Field(
        default="data", description="Directory for file-backed state documents"
    )
    state_storage_key: str = Field(
        default="training-admin-data", description="Storage key of the state document"
    )
    credentials_storage_key: str = Field(
        default="training-admin-credentials",
        description="Storage key of the admin credentials document",
    )
    seed_demo_data: bool = Field(
        default=True, description="Seed demo data when no state document exists"
    )

    # Cassandra
    cassandra_hosts: list[str] = Field(
        default=["localhost"], description="Cassandra hosts"
    )
    cassandra_port: int = Field(default=9042, description="Cassandra port")
    cassandra_keyspace: str = Field(
        default="training_admin", description="Cassandra keyspace"
    )
    cassandra_username: str | None = Field(default=None, description="Cassandra user")
    cassandra_password: str | None = Field(
        default=None, description="Cassandra password"
    )
    cassandra_protocol_version: int = Field(default=4, description="Protocol version")
    cassandra_connect_timeout: float = Field(
        default=10.0, description="Connect timeout"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=True, description="Include caller info"
    )
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    log_requests: bool = Field(
        default=True, description="Log HTTP request start/finish"
    )
    log_exclude_paths: list[str] = Field(
        default=["/health", "/health/live", "/health/ready"],
        description="Paths to exclude from request logging",
    )

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="CORS origins")
    cors_allow_credentials: bool = Field(default=True, description="Allow credentials")
    cors_allow_methods: list[str] = Field(default=["*"], description="Allowed methods")
    cors_allow_headers: list[str] = Field(default=["*"], description="Allowed headers")
    cors_max_age: int = Field(default=600, description="CORS max age")

    # Training analytics
    stagnation_hours: int = Field(
        default=72, description="Hours without access before an employee stagnates"
    )
    at_risk_completion_ratio: float = Field(
        default=0.3, description="Completion ratio below which an employee is at risk"
    )
    struggling_score_threshold: int = Field(
        default=70, description="Assessment score below which a learner struggles"
    )
    minutes_per_completed_module: int = Field(
        default=45, description="Training minutes credited per completed module"
    )
    top_performers_limit: int = Field(default=5, description="Dashboard top performers")
    needs_attention_limit: int = Field(
        default=3, description="Dashboard employees needing attention"
    )
    recent_activity_limit: int = Field(
        default=6, description="Dashboard recent activity rows"
    )
    default_passing_score: int = Field(
        default=70, description="Passing score of generated assessments"
    )
    default_test_duration_minutes: int = Field(
        default=30, description="Duration of generated assessments"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
