"""
App Configuration.

This module defines the deploy gate settings using Pydantic Settings.
Values come from environment variables and/or a .env file. When running as a
GitHub Action, the `INPUT_*` variables generated from the action inputs are
accepted as well.

Validation happens in `get_settings()`, before any network call is made. The
first invalid value aborts the run with a ConfigurationError.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import ConfigurationError
from app.schemas.enums import DeployDependencies, VersionBump


def _env(name: str, action_input: str) -> AliasChoices:
    return AliasChoices(name, f"INPUT_{action_input.upper()}")


class Settings(BaseSettings):
    """
    Deploy gate settings.

    Attributes:
        TIMEZONE: IANA zone used to evaluate working hours.
        MAX_DEPLOY_VERSION: Highest bump type that is deployed automatically.
        DEPLOY_DEPENDENCIES: "dev" deploys only non-production packages, "all" everything.
        DEPLOY_ONLY_IN_WORKING_HOURS: Restrict deploys to Mon-Fri 07:00-17:00.
        UPDATE_INDIRECT_DEPENDENCIES: Act on packages missing from package.json.
        GITHUB_TOKEN: Token used for every GitHub API call.
    """

    # Decision inputs, validated in this order
    TIMEZONE: str = Field(default="Europe/Prague", validation_alias=_env("TIMEZONE", "timezone"))
    MAX_DEPLOY_VERSION: VersionBump = Field(
        default=VersionBump.MAJOR,
        validation_alias=_env("MAX_DEPLOY_VERSION", "maxDeployVersion"),
    )
    DEPLOY_DEPENDENCIES: DeployDependencies = Field(
        default=DeployDependencies.DEV,
        validation_alias=_env("DEPLOY_DEPENDENCIES", "deployDependencies"),
    )
    DEPLOY_ONLY_IN_WORKING_HOURS: bool = Field(
        default=True,
        validation_alias=_env("DEPLOY_ONLY_IN_WORKING_HOURS", "deployOnlyInWorkingHours"),
    )
    UPDATE_INDIRECT_DEPENDENCIES: bool = Field(
        default=False,
        validation_alias=_env("UPDATE_INDIRECT_DEPENDENCIES", "updateIndirectDependencies"),
    )
    GITHUB_TOKEN: SecretStr = Field(validation_alias=_env("GITHUB_TOKEN", "gitHubToken"))

    # GitHub
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_WEBHOOK_SECRET: Optional[SecretStr] = None
    GITHUB_REPOSITORY: Optional[str] = None
    DEFAULT_BRANCH: str = "master"
    DEPLOY_ENVIRONMENT: str = "production"

    # Policy & manifest
    POLICY_PATH: Optional[Path] = None
    MANIFEST_ROOT: Optional[Path] = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    @field_validator("TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"Unexpected input {value} for timezone. Use a name from the IANA "
                "time zone database, e.g. Europe/Prague"
            ) from e
        return value

    @field_validator("MAX_DEPLOY_VERSION", mode="before")
    @classmethod
    def _version_by_name(cls, value):
        if isinstance(value, VersionBump):
            return value
        try:
            return VersionBump[str(value).strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unexpected input for maxDeployVersion {value}") from e

    @field_validator("DEPLOY_DEPENDENCIES", mode="before")
    @classmethod
    def _deploy_dependencies(cls, value):
        if isinstance(value, DeployDependencies):
            return value
        try:
            return DeployDependencies(str(value).strip().lower())
        except ValueError as e:
            raise ValueError(f"Unexpected input for deployDependencies {value}") from e

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


def build_settings(**overrides) -> Settings:
    """
    Validate configuration and build a Settings instance.

    Raises:
        ConfigurationError: describing the first invalid value.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "settings"
        message = first["msg"].removeprefix("Value error, ")
        raise ConfigurationError(f"Invalid configuration for {field}: {message}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, validated once."""
    return build_settings()
