"""Immutable credentials and endpoint bundle shared across calls."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
import structlog

from kinesis_client.config import Settings, settings as default_settings
from kinesis_client.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("secret_key", "access_key_id", "region", "endpoint")


class AWSContext(BaseModel):
    """
    Static credentials plus region and endpoint for one Kinesis service.

    A context is never mutated by a call, so one instance can be reused
    for many calls and shared read-only between threads.
    """

    model_config = ConfigDict(frozen=True)

    secret_key: Optional[str] = Field(default=None, repr=False)
    access_key_id: Optional[str] = None
    session_token: Optional[str] = Field(default=None, repr=False)
    region: Optional[str] = None
    endpoint: Optional[str] = None

    @field_validator("session_token", mode="before")
    @classmethod
    def _empty_token_is_absent(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("endpoint", mode="before")
    @classmethod
    def _endpoint_host(cls, value: Any) -> Any:
        """Accept 'host', 'https://host' or 'https://host/'."""
        if isinstance(value, str):
            for scheme in ("https://", "http://"):
                if value.lower().startswith(scheme):
                    value = value[len(scheme):]
            value = value.rstrip("/")
        return value

    @model_validator(mode="after")
    def _check_required(self) -> "AWSContext":
        missing = [name for name in REQUIRED_FIELDS if not getattr(self, name)]
        if missing:
            logger.error("aws_context_incomplete", missing=missing)
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
        return self

    @property
    def url(self) -> str:
        """Base URL requests are posted to."""
        return f"https://{self.endpoint}"

    @property
    def has_session_token(self) -> bool:
        return self.session_token is not None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "AWSContext":
        """
        Build a context from settings.

        Args:
            config: Settings instance (defaults to the global settings)

        Raises:
            ConfigurationError: If a required credential or config value is missing
        """
        config = config or default_settings
        return cls(
            secret_key=config.aws_secret_access_key,
            access_key_id=config.aws_access_key_id,
            session_token=config.aws_session_token,
            region=config.aws_region,
            endpoint=config.get_kinesis_endpoint(),
        )
