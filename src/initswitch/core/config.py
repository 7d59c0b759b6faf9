"""Configuration models for initswitch service providers.

Defines Pydantic v2 models for the upstart (modern) and sysvinit (legacy)
engines: search paths, control binaries, and defaults used when editing
job files. Configuration may be loaded from YAML; every field has a default
matching a stock Debian/Ubuntu layout.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator


def _require_absolute(paths: list[Path]) -> list[Path]:
    if not paths:
        raise ValueError("at least one search path is required")
    for path in paths:
        if not path.is_absolute():
            raise ValueError(f"search path must be absolute: {path}")
    return paths


class UpstartConfig(BaseModel):
    """Settings for the upstart job engine."""

    job_paths: list[Path] = Field(
        default_factory=lambda: [Path("/etc/init")],
        description="Ordered directories searched for <job>.conf and <job>.override. "
        "First hit wins.",
    )
    initctl: str = Field(
        default="/sbin/initctl",
        description="Upstart control binary. Invoked as '<initctl> <verb> <job>' "
        "and '<initctl> --version'.",
    )
    default_start_on: str = Field(
        default="start on runlevel [2345]",
        description="Stanza appended when enabling a job that has no start-on stanza.",
    )
    file_mode: int = Field(
        default=0o644,
        ge=0,
        le=0o777,
        description="Permissions applied to job and override files after writing.",
    )
    drop_session_env: bool = Field(
        default=True,
        description="Remove UPSTART_SESSION from the environment of initctl calls "
        "so that they act on the system instance rather than a user session.",
    )

    @field_validator("job_paths")
    @classmethod
    def _check_job_paths(cls, v: list[Path]) -> list[Path]:
        return _require_absolute(v)

    @field_validator("default_start_on")
    @classmethod
    def _check_default_start_on(cls, v: str) -> str:
        if not v.lstrip().startswith("start on"):
            raise ValueError("default_start_on must be a 'start on' stanza")
        if "\n" in v:
            raise ValueError("default_start_on must be a single line")
        return v


class SysvinitConfig(BaseModel):
    """Settings for the legacy single-file (SysV init script) engine."""

    script_paths: list[Path] = Field(
        default_factory=lambda: [Path("/etc/init.d")],
        description="Ordered directories searched for init scripts.",
    )
    rc_root: Path = Field(
        default=Path("/etc"),
        description="Directory holding the rc<runlevel>.d link farms.",
    )
    update_rc_d: str = Field(
        default="/usr/sbin/update-rc.d",
        description="Tool used to install, enable, disable and remove rc links.",
    )
    runlevel_command: str = Field(
        default="/sbin/runlevel",
        description="Command printing '<previous> <current>' runlevels.",
    )
    default_runlevel: str = Field(
        default="2",
        pattern=r"^[0-6Ss]$",
        description="Runlevel assumed when the current one cannot be determined.",
    )

    @field_validator("script_paths")
    @classmethod
    def _check_script_paths(cls, v: list[Path]) -> list[Path]:
        return _require_absolute(v)


class ProviderConfig(BaseModel):
    """Root configuration for initswitch."""

    upstart: UpstartConfig = Field(default_factory=UpstartConfig)
    sysvinit: SysvinitConfig = Field(default_factory=SysvinitConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level for structlog output.",
    )
    log_format: Literal["json", "console", "both"] = Field(
        default="console",
        description="Log rendering; 'both' requires log_file.",
    )
    log_file: Path | None = Field(
        default=None,
        description="Log file path. None means log to stderr only.",
    )

    @classmethod
    def from_yaml(cls, path: Path) -> ProviderConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> ProviderConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})
