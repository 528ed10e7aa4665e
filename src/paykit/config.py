"""Configuration surface for the paykit toolkit."""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

Environment = Literal["production", "sandbox"]

ENVIRONMENT_URLS: dict[str, str] = {
    "production": "https://agent.payman.ai/api",
    "sandbox": "https://agent-sandbox.payman.ai/api",
}


class PaykitSettings(BaseSettings):
    """Credentials and environment for the payments backend.

    Values can be passed directly or read from ``PAYMAN_*`` environment
    variables (``PAYMAN_API_SECRET``, ``PAYMAN_ENVIRONMENT``, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYMAN_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    api_secret: str
    environment: Environment = "sandbox"

    # HTTP client tuning
    base_url: Optional[str] = None
    timeout: float = 30.0
    max_retries: int = 2

    @field_validator("api_secret")
    @classmethod
    def validate_api_secret(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api_secret must be a non-empty string")
        return v

    @field_validator("environment", mode="before")
    @classmethod
    def default_environment(cls, v):
        """Treat an unset environment as sandbox."""
        if v is None or v == "":
            return "sandbox"
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries cannot be negative")
        return v

    @property
    def resolved_base_url(self) -> str:
        """Base URL for the configured environment."""
        return (self.base_url or ENVIRONMENT_URLS[self.environment]).rstrip("/")


def load_settings(**overrides) -> PaykitSettings:
    """Build settings, raising :class:`ConfigurationError` on bad input.

    Keyword arguments override values found in the environment; keys whose
    value is ``None`` are ignored so callers can forward optional arguments.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return PaykitSettings(**values)
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] for e in errors)
        raise ConfigurationError(f"Invalid paykit configuration: {fields}", errors=errors) from exc
