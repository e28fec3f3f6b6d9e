"""Environment configuration for the Jira MCP server.

Settings are read from ``JIRA_*`` environment variables (optionally from a
``.env`` file) and resolved into a single immutable ConnectionProfile that the
Jira client owns for the lifetime of the process.
"""
import logging
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("jira-mcp.config")

ENV_PREFIX = "JIRA_"


class ConfigurationError(Exception):
    """Raised when the environment does not describe a usable Jira connection."""


class TokenAuth(BaseModel):
    """Personal access token, sent as a Bearer credential."""

    model_config = ConfigDict(frozen=True)

    type: Literal["pat"] = "pat"
    token: SecretStr


class BasicAuth(BaseModel):
    """Username and password, sent as HTTP Basic credentials."""

    model_config = ConfigDict(frozen=True)

    type: Literal["basic"] = "basic"
    username: str
    password: SecretStr


Credential = Annotated[Union[TokenAuth, BasicAuth], Field(discriminator="type")]


class ConnectionProfile(BaseModel):
    """Resolved base address and credential for all outbound calls."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    auth: Credential

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value[:-1] if value.endswith("/") else value


class Settings(BaseSettings):
    """Jira MCP settings loaded from the environment.

    JIRA_BASE_URL is always required. JIRA_AUTH_TYPE selects which credential
    variables must be present: ``pat`` needs JIRA_PAT, ``basic`` needs
    JIRA_USERNAME and JIRA_PASSWORD.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = ""
    auth_type: Literal["pat", "basic"] = "pat"
    pat: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    timeout: float = Field(30.0, gt=0)
    mcp_debug: bool = False
    log_dir: Path = Path(".jira-mcp")

    @field_validator("mcp_debug", mode="before")
    @classmethod
    def any_value_enables_debug(cls, value: object) -> object:
        # Set and non-empty means on, whatever the value.
        if isinstance(value, str):
            return bool(value.strip())
        return value

    @model_validator(mode="after")
    def check_credentials(self) -> "Settings":
        if not self.base_url:
            raise ValueError("JIRA_BASE_URL environment variable is required")
        if self.auth_type == "pat":
            if self.pat is None or not self.pat.get_secret_value():
                raise ValueError(
                    "JIRA_PAT environment variable is required when using PAT authentication"
                )
        elif not self.username or self.password is None or not self.password.get_secret_value():
            raise ValueError(
                "JIRA_USERNAME and JIRA_PASSWORD are required when using basic authentication"
            )
        return self

    def connection_profile(self) -> ConnectionProfile:
        """Build the immutable connection profile for the configured auth type."""
        if self.auth_type == "pat":
            auth = TokenAuth(token=self.pat)
        else:
            auth = BasicAuth(username=self.username, password=self.password)
        return ConnectionProfile(base_url=self.base_url, auth=auth)


def _describe_errors(exc: ValidationError) -> str:
    # Only locations and messages; input values may hold credentials.
    problems = []
    for error in exc.errors():
        message = error["msg"].removeprefix("Value error, ")
        if error["loc"]:
            field = ENV_PREFIX + str(error["loc"][0]).upper()
            if field == "JIRA_AUTH_TYPE":
                message = 'Invalid JIRA_AUTH_TYPE. Must be "pat" or "basic"'
            problems.append(f"{field}: {message}")
        else:
            problems.append(message)
    return "; ".join(problems)


def load_settings(env_file: Optional[str | Path] = ".env") -> Settings:
    """Load settings from the environment, raising ConfigurationError on failure."""
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(_describe_errors(e)) from None
    logger.debug(f"Loaded settings for {settings.base_url} (auth: {settings.auth_type})")
    return settings
