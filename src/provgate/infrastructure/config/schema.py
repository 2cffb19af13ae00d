"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class BaseUrlConfig(BaseModel):
    """Where providers' current base URLs come from."""

    source_url: Optional[str] = Field(
        default=None,
        description='Remote JSON map {"<provider>": {"url": "..."}}. Unset = overrides only.',
    )
    ttl_seconds: float = Field(
        default=3600.0,
        description="How long the remote map is reused before refetching.",
    )
    overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Static provider -> base URL entries (win over the remote map).",
    )


class BuildConfig(BaseModel):
    """Build command triggered by POST /build."""

    command: list[str] = Field(
        default_factory=lambda: ["node", "build.js"],
        description="argv of the provider build command.",
    )
    cwd: Optional[Path] = Field(
        default=None,
        description="Working directory for the build (default: process cwd).",
    )
    timeout_seconds: float = Field(
        default=300.0,
        description="Build is reported as failed after this many seconds.",
    )

    @field_validator("command")
    @classmethod
    def _validate_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("build.command must not be empty")
        return v

    @field_validator("cwd", mode="before")
    @classmethod
    def _validate_cwd(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (providers/execution/http/logging/...).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="provgate", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Providers (YAML section: providers.*)
    source_dir: Path = Field(
        default=Path("./providers"),
        validation_alias=AliasChoices(
            "source_dir",
            AliasPath("providers", "source_dir"),
        ),
        description="Root of the providers' declarative source artifacts.",
    )
    dist_dir: Path = Field(
        default=Path("./dist"),
        validation_alias=AliasChoices(
            "dist_dir",
            AliasPath("providers", "dist_dir"),
        ),
        description="Root of the compiled provider modules (one directory per provider).",
    )
    manifest_path: Path = Field(
        default=Path("./manifest.json"),
        validation_alias=AliasChoices(
            "manifest_path",
            AliasPath("providers", "manifest_path"),
        ),
        description="Build manifest; its mtime is reported as the build time.",
    )
    catalog_filename: str = Field(
        default="catalog.ts",
        validation_alias=AliasChoices(
            "catalog_filename",
            AliasPath("providers", "catalog_filename"),
        ),
        description="File inside each provider source dir holding catalog/genres.",
    )

    # Execution (YAML section: execution.*)
    execution_timeout_seconds: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "execution_timeout_seconds",
            AliasPath("execution", "timeout_seconds"),
        ),
        description="Deadline per provider call. Unset = no deadline enforced.",
    )

    # HTTP client shared with providers (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for provider requests.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether HTTP client follows redirects.",
    )
    http_user_agent: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing requests (browser preset when unset).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    base_urls: BaseUrlConfig = Field(default_factory=BaseUrlConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @field_validator("source_dir", "dist_dir", "manifest_path", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("execution_timeout_seconds")
    @classmethod
    def _validate_execution_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("execution_timeout_seconds must be > 0 when set")
        return v

    @field_validator("catalog_filename")
    @classmethod
    def _validate_catalog_filename(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError("catalog_filename must be a bare file name")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "providers": {
                "source_dir": str(self.source_dir),
                "dist_dir": str(self.dist_dir),
                "manifest_path": str(self.manifest_path),
                "catalog_filename": self.catalog_filename,
            },
            "execution": {"timeout_seconds": self.execution_timeout_seconds},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "base_urls": self.base_urls.model_dump(),
            "build": self.build.model_dump(mode="json"),
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read PROVGATE_* variables, converts
    them to a dict of set values, merges that over YAML/defaults, then
    validates AppConfig.

    Supported env var examples (flat, explicit):
    - PROVGATE_DIST_DIR
    - PROVGATE_SOURCE_DIR
    - PROVGATE_EXECUTION_TIMEOUT_SECONDS
    - PROVGATE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="PROVGATE_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    source_dir: Optional[Path] = None
    dist_dir: Optional[Path] = None
    manifest_path: Optional[Path] = None
    catalog_filename: Optional[str] = None

    execution_timeout_seconds: Optional[float] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    base_url_source: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    @field_validator("source_dir", "dist_dir", "manifest_path", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
