from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "zscript.toml"
PK3_PATH_ENV = "ZSCRIPT_GZDOOM_PK3_PATH"


class ZScriptConfig(BaseModel):
    """Configuration for signature scanning and editor queries."""

    model_config = ConfigDict(extra="forbid")

    gzdoom_pk3_path: str | None = Field(
        default=None,
        description="Path to gzdoom.pk3 (or any archive) holding built-in scripts",
    )
    script_dir: str = Field(
        default="zscript",
        description="Top-level archive directory holding script entries",
    )
    skip_extensions: list[str] = Field(
        default_factory=lambda: [".txt"],
        description="Entry extensions skipped inside script_dir",
    )
    language_id: str = Field(
        default="zscript",
        description="Editor language tag the providers answer for",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition when discovering project roots"
        ),
    )

    @field_validator("script_dir")
    @classmethod
    def validate_script_dir(cls, v: str) -> str:
        """Normalise script_dir to a bare, lower-case directory name."""
        cleaned = v.strip().strip("/").lower()
        if not cleaned:
            msg = "script_dir must be a non-empty directory name"
            raise ValueError(msg)
        return cleaned

    @field_validator("skip_extensions", mode="before")
    @classmethod
    def validate_skip_extensions(cls, v: Any) -> Any:
        if v is None:
            return []

        if not isinstance(v, list):
            msg = "skip_extensions must be a list of extensions"
            raise TypeError(msg)

        normalized: list[str] = []
        for ext in v:
            if not isinstance(ext, str) or not ext.strip():
                msg = f"Invalid extension {ext!r} in skip_extensions"
                raise ValueError(msg)
            ext = ext.strip().lower()
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized

    def archive_path(self, override: str | Path | None = None) -> Path | None:
        """Resolve the archive path: explicit override, environment, then config."""
        if override:
            return Path(override).expanduser()
        env_value = os.environ.get(PK3_PATH_ENV)
        if env_value:
            return Path(env_value).expanduser()
        if self.gzdoom_pk3_path:
            return Path(self.gzdoom_pk3_path).expanduser()
        return None


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> ZScriptConfig:
    """Load configuration from zscript.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ZScriptConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ZScriptConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
