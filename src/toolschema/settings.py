"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from toolschema.models import MissingDocPolicy  # noqa: TC001 - pydantic needs the runtime type


class Settings(BaseSettings):
    """Configuration object for schema generation and the CLI."""

    model_config = SettingsConfigDict(env_prefix="TOOLSCHEMA_", env_file=".env", extra="allow")

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Schema generation
    doc_miss_policy: MissingDocPolicy = "warn"

    # Tools to load, as ``package.module:ClassName`` import paths
    tools: list[str] = []
