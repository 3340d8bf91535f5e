"""Client configuration management."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")

    # AWS credentials (static only, never refreshed)
    aws_secret_access_key: Optional[str] = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    aws_access_key_id: Optional[str] = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_session_token: Optional[str] = Field(default=None, alias="AWS_SESSION_TOKEN")
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")

    # Kinesis endpoint
    kinesis_endpoint: Optional[str] = Field(default=None, alias="KINESIS_ENDPOINT")

    # Transport
    request_timeout_seconds: float = Field(default=20.0, alias="KINESIS_REQUEST_TIMEOUT")
    verify_ssl: bool = Field(default=True, alias="KINESIS_VERIFY_SSL")
    max_response_size: int = Field(default=65536, alias="KINESIS_MAX_RESPONSE_SIZE")

    # Monitoring
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")

    def get_kinesis_endpoint(self, region: Optional[str] = None) -> str:
        """Get Kinesis endpoint host for region."""
        if self.kinesis_endpoint:
            return self.kinesis_endpoint
        return f"kinesis.{region or self.aws_region}.amazonaws.com"


# Global settings instance
settings = Settings()
