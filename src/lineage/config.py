from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lineage.exceptions import ConfigError
from lineage.logging import get_logger

__all__ = [
    "LineageConfig",
    "GitConfig",
    "P4Config",
    "SvnConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

#: Default number of raw-output characters kept in diagnostic log lines.
DEFAULT_PREVIEW_CHARS = 4000

DEFAULT_GIT_NO_HISTORY_PATTERNS: tuple[str, ...] = (
    "not a git repository",
    "not in a git directory",
    "outside repository",
    "did not match any file(s) known to git",
)

DEFAULT_P4_NO_HISTORY_PATTERNS: tuple[str, ...] = (
    "not in client view",
    "not under client's root",
    "is not under client",
    "no such file",
    "file(s) not on client",
    "unknown client",
    "client unknown",
    "use 'client' command to create it",
    "client not found",
)

DEFAULT_SVN_NO_HISTORY_PATTERNS: tuple[str, ...] = (
    "not a working copy",
    "is not under version control",
    "e155007",
    "e155010",
    "w155010",
    "e200009",
    "e160013",
    "path not found",
    "was not found",
)

DEFAULT_P4_CONFIG_FILENAMES: tuple[str, ...] = (
    ".p4config",
    "p4config.txt",
    ".p4config.txt",
    "p4.config",
)


def _normalize_patterns(patterns: list[str]) -> list[str]:
    cleaned = [p.strip().lower() for p in patterns if p and p.strip()]
    if not cleaned:
        raise ValueError("pattern list must contain at least one entry")
    return cleaned


class GitConfig(BaseModel):
    """Settings for the git backend.

    The git executable itself is located by GitPython
    (``GIT_PYTHON_GIT_EXECUTABLE`` overrides it).
    """

    no_history_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GIT_NO_HISTORY_PATTERNS)
    )

    @field_validator("no_history_patterns")
    @classmethod
    def normalize_patterns(cls, v: list[str]) -> list[str]:
        return _normalize_patterns(v)


class P4Config(BaseModel):
    """Settings for the Perforce backend.

    Attributes:
        executable: Name or path of the ``p4`` CLI.
        config_env_var: Environment variable p4 reads its config file name from.
        config_filenames: File names searched for, upward from the file's
            directory, when ``config_env_var`` is not set.
        no_history_patterns: Error substrings meaning "not a p4 file".
    """

    executable: str = "p4"
    config_env_var: str = "P4CONFIG"
    config_filenames: list[str] = Field(
        default_factory=lambda: list(DEFAULT_P4_CONFIG_FILENAMES)
    )
    no_history_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_P4_NO_HISTORY_PATTERNS)
    )

    @field_validator("no_history_patterns")
    @classmethod
    def normalize_patterns(cls, v: list[str]) -> list[str]:
        return _normalize_patterns(v)


class SvnConfig(BaseModel):
    """Settings for the Subversion backend."""

    executable: str = "svn"
    no_history_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SVN_NO_HISTORY_PATTERNS)
    )

    @field_validator("no_history_patterns")
    @classmethod
    def normalize_patterns(cls, v: list[str]) -> list[str]:
        return _normalize_patterns(v)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning("config_file_empty", path=str(yaml_file))
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            field=None,
                            value=type(loaded).__name__,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class LineageConfig(BaseSettings):
    """Root configuration object for history resolution."""

    model_config = SettingsConfigDict(
        env_prefix="LINEAGE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    git: GitConfig = Field(default_factory=GitConfig)
    p4: P4Config = Field(default_factory=P4Config)
    svn: SvnConfig = Field(default_factory=SvnConfig)
    preview_chars: int = Field(default=DEFAULT_PREVIEW_CHARS, ge=80, le=100000)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments (explicit keyword arguments)
        2. Environment variables (LINEAGE_*)
        3. Project YAML config (LINEAGE_CONFIG_FILE or ./lineage.yaml)
        4. User YAML config (~/.config/lineage/config.yaml)
        """
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, get_project_config_path()),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


#: Environment variable naming an explicit project config file.
CONFIG_FILE_ENV_VAR = "LINEAGE_CONFIG_FILE"


def get_project_config_path() -> Path:
    """Get the project configuration file path.

    Returns:
        ``$LINEAGE_CONFIG_FILE`` when set, else ``./lineage.yaml``.
    """
    explicit = os.environ.get(CONFIG_FILE_ENV_VAR)
    if explicit:
        return Path(explicit)
    return Path.cwd() / "lineage.yaml"


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/lineage/config.yaml
    """
    return Path.home() / ".config" / "lineage" / "config.yaml"


def load_config(config_path: Path | None = None) -> LineageConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional project config file. Defaults to ./lineage.yaml.

    Returns:
        LineageConfig instance with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    settings_cls: type[LineageConfig] = LineageConfig
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(
                message=f"Config file not found: {config_path}",
                field=None,
                value=str(config_path),
            )
        settings_cls = _with_project_file(config_path)
    elif not get_project_config_path().exists():
        logger.debug("no_project_config", path=str(get_project_config_path()))

    try:
        return settings_cls()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e


def _with_project_file(config_path: Path) -> type[LineageConfig]:
    """Return a LineageConfig subclass reading *config_path* as project YAML."""

    class _ExplicitFileConfig(LineageConfig):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (
                init_settings,
                env_settings,
                YamlConfigSource(settings_cls, config_path),
                YamlConfigSource(settings_cls, get_user_config_path()),
            )

    return _ExplicitFileConfig
