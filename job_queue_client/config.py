"""Client configuration.

``ClientConfig`` is the validated, immutable set of options a ``Client`` is
built from. ``Settings`` loads the same options from the environment (or a
``.env`` file) for applications that prefer to configure the client there.
"""

from functools import lru_cache
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

from job_queue_client.exceptions import ClientError

DEFAULT_USER_AGENT = "Job Queue Python Client"
DEFAULT_BACKOFF_MAX_TRIES = 3
CONNECT_TIMEOUT_SECONDS = 10.0
TIMEOUT_SECONDS = 120.0


class ClientConfig(BaseModel):
    """Options for a job queue client.

    All fields are validated together so a bad configuration reports every
    problem at once instead of the first one found.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = Field(..., description="Public URL of the job queue API")
    token: str = Field(..., description="Storage API token sent with every request")
    backoff_max_tries: int = Field(
        default=DEFAULT_BACKOFF_MAX_TRIES,
        ge=0,
        le=100,
        description="How many times a failed request is retried",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    transport: Optional[httpx.BaseTransport] = Field(
        default=None, description="Transport override, mostly for tests"
    )
    logger: Optional[Any] = Field(
        default=None, description="Logger for request and retry events"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL:
            url = None
        if url is None or url.scheme not in ("http", "https") or not url.host:
            raise PydanticCustomError("url", "This value is not a valid URL.")
        return v

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("not_blank", "This value should not be blank.")
        return v

    @field_validator("backoff_max_tries", mode="before")
    @classmethod
    def default_backoff_max_tries(cls, v: Any) -> Any:
        if v is None or v == "":
            return DEFAULT_BACKOFF_MAX_TRIES
        return v

    @field_validator("user_agent", mode="before")
    @classmethod
    def default_user_agent(cls, v: Any) -> Any:
        return v or DEFAULT_USER_AGENT

    @classmethod
    def create(cls, **options: Any) -> "ClientConfig":
        """Validate options, raising ``ClientError`` listing every violation."""
        try:
            return cls(**options)
        except ValidationError as e:
            messages = "".join(
                f'Value "{_render_input(err.get("input"))}" is invalid: {err["msg"]}\n'
                for err in e.errors()
            )
            raise ClientError(
                f"Invalid parameters when creating client: {messages}"
            ) from e


def _render_input(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        # missing required field: pydantic reports the whole input
        return ""
    return str(value)


class Settings(BaseSettings):
    """Job queue client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JOB_QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(..., description="Public URL of the job queue API")
    token: Optional[str] = Field(
        default=None, description="Storage API token (optional for factories)"
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    backoff_max_tries: int = Field(
        default=DEFAULT_BACKOFF_MAX_TRIES, description="Retry budget per request"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
