"""
Configuration management for the Test Bench
Uses Pydantic Settings for environment variable management
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    # LiveKit Configuration
    livekit_url: str = Field(default="ws://localhost:7880")
    livekit_api_key: Optional[str] = Field(default=None)
    livekit_api_secret: Optional[str] = Field(default=None)
    livekit_agent_name: Optional[str] = Field(default=None)

    # Control API (backend) Configuration
    control_api_url: str = Field(
        default="",
        validation_alias=AliasChoices("control_api_url", "next_public_control_api_url")
    )
    control_api_timeout: float = Field(default=30.0)

    # CloudWatch Logs
    enable_cloudwatch_logs: bool = Field(
        default=False,
        validation_alias=AliasChoices("enable_cloudwatch_logs", "next_public_enable_cloudwatch_logs")
    )
    cloudwatch_region: Optional[str] = Field(default=None)
    aws_region: Optional[str] = Field(default=None)
    aws_default_region: Optional[str] = Field(default=None)
    cloudwatch_log_group: Optional[str] = Field(default=None)
    cloudwatch_stream_prefix: Optional[str] = Field(default=None)
    cloudwatch_logs_token: Optional[str] = Field(default=None)
    cloudwatch_max_pages: int = Field(default=10)

    # AWS credentials (presence is reported, values never are)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    aws_session_token: Optional[str] = Field(default=None)
    aws_profile: Optional[str] = Field(default=None)

    # Local docker-compose logs
    enable_local_logs: bool = Field(
        default=False,
        validation_alias=AliasChoices("enable_local_logs", "next_public_enable_local_logs")
    )
    local_logs_compose_dir: str = Field(default="../backend")
    local_logs_compose_files: str = Field(default="docker-compose.yml,docker-compose.local.yml")
    local_logs_command: str = Field(default="docker-compose")
    local_logs_max_bytes: int = Field(default=1024 * 1024)
    local_logs_timeout: float = Field(default=30.0)

    # Activity log
    activity_log_file_path: str = Field(default="activity_log.json")
    activity_log_max_entries: int = Field(default=20)

    # Application Settings
    debug: bool = Field(default=True)
    log_level: str = Field(default="DEBUG")
    environment: str = Field(default="development")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=8000)

    # CORS Settings
    allowed_origins: str = Field(default="http://localhost:3000,http://localhost:8000")

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def compose_files(self) -> List[str]:
        """Parse compose file list from comma-separated string"""
        return [f.strip() for f in self.local_logs_compose_files.split(",") if f.strip()]

    @property
    def env_region(self) -> Optional[str]:
        """Region from the environment, first non-empty of the known variables"""
        return self.cloudwatch_region or self.aws_region or self.aws_default_region or None

    @property
    def control_api_configured(self) -> bool:
        # A bare "true" is a leftover of boolean-style deployment templates
        return bool(self.control_api_url) and self.control_api_url != "true"

    @property
    def control_api_base(self) -> str:
        return self.control_api_url.rstrip("/")

    @property
    def livekit_configured(self) -> bool:
        return bool(self.livekit_url and self.livekit_api_key and self.livekit_api_secret)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
